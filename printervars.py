"""Printer control variables.  Rebind these dynamically with

    with bindings(printervars, print_escape=False):
        ...

rather than assigning to them."""

# Print strings, characters, and symbols so that they can be read back.
print_escape = True

# Break lines at conditional newlines to fit within the right margin.
print_pretty = False

# Label shared and circular structure with #n= and #n#.
print_circle = False

# Column at which pretty printing wraps; None means use the width of the
# output stream.
print_right_margin = None
