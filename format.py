"""An implementation of the Scheme FORMAT procedure (SRFI 48 directives)."""

import sys
import math
import decimal
import logging
from io import StringIO
from numbers import Number, Integral, Complex, Real
from bindings import bindings
from charpos import CharposStream
from datum import Char, to_list
from prettyprinter import pformat, number_to_string
import printervars

__all__ = ["Formatter", "format", "FormatError", "MalformedDirective",
           "ArgumentUnderflow", "ArgumentOverflow", "TypeMismatch"]

logger = logging.getLogger(__name__)

class FormatError(Exception):
    """Base class for format errors.  The message is itself a control
    string, formatted with the remaining arguments."""

    def __init__(self, control, *args):
        self.control = control
        self.args = args

    def __str__(self):
        return format(None, self.control, *self.args)

class MalformedDirective(FormatError):
    offset = 3
    def __init__(self, control, index, message, *args):
        super(MalformedDirective, self).__init__("~?~%  \"~a\"~%~a^",
                                                 message, list(args), control,
                                                 " " * (index + self.offset))
        self.control_string = control
        self.index = index

class ArgumentUnderflow(FormatError, IndexError):
    pass

class ArgumentOverflow(FormatError):
    pass

class TypeMismatch(FormatError, TypeError):
    pass

class Arguments(object):
    """A container for format arguments.  Essentially a read-only list, but
    with a cursor that only moves forward, and that must reach the end."""

    def __init__(self, args):
        self.args = args
        self.len = len(self.args)
        self.cur = 0

    def next(self):
        cur = self.cur
        if cur == self.len:
            raise ArgumentUnderflow("not enough arguments: ~d supplied",
                                    self.len)
        self.cur = cur + 1
        return self.args[cur]

    def finish(self):
        """Check that every argument has been used."""
        if self.cur < self.len:
            unused = list(self.args[self.cur:])
            logger.debug("%d of %d arguments unused", len(unused), self.len)
            raise ArgumentOverflow("too many arguments: ~d left unused, ~w",
                                   len(unused), unused)

class Directive(object):
    """Base class for all format directives.  The control-string parser creates
    instances of (subclasses of) this class, which produce appropriately
    formatted output via their format methods."""

    parameters_allowed = 0

    def __init__(self, params, control, start, end):
        if len(params) > self.parameters_allowed:
            raise FormatError("no more than ~d parameters allowed "
                              "for this directive", self.parameters_allowed)
        self.params = [int(p) if p else None for p in params]
        self.control = control; self.start = start; self.end = end

    def __str__(self): return self.control[self.start:self.end]

    def format(self, stream, args):
        """Output zero or more arguments to stream."""
        pass

    def param(self, n, default=None):
        p = self.params[n] if n < len(self.params) else None
        return default if p is None else p

# Basic Output

class ConstantChar(Directive):
    """Directives that produce a constant string don't need a Directive
    instance at all; the parser yields the string itself."""

    def __new__(cls, params, *args):
        return cls.character

class Newline(ConstantChar):
    character = "\n"

class Tab(ConstantChar):
    character = "\t"

class Space(ConstantChar):
    character = " "

class Tilde(ConstantChar):
    character = "~"

class Help(ConstantChar):
    character = """\
FORMAT [destination] control-string argument ...
  With no destination or #f, return the output as a string; with #t, write
  it to standard output; with a port, write it there.
Directives (the letter may be either case):
  ~a    the next argument, as display would print it
  ~s    the next argument, as write would print it
  ~w    the next argument, as write would print it, with labels for shared
        and circular structure
  ~d    the next argument, an integer, in decimal
  ~x    the next argument, an integer, in hexadecimal
  ~o    the next argument, an integer, in octal
  ~b    the next argument, an integer, in binary
  ~c    the next argument, a character
  ~y    the next argument, pretty-printed
  ~?    the next two arguments: a control string, and a list of arguments
        for it
  ~k    the same as ~?
  ~w,dF the next argument, a number or string, right-justified in a field
        of w columns; numbers get exactly d digits after the decimal point
  ~~    a tilde
  ~t    a tab
  ~%    a newline
  ~&    a newline, unless already at the start of a line
  ~_    a space
  ~h    this help
"""

class FreshLine(Directive):
    def format(self, stream, args):
        stream.fresh_line()

class Character(Directive):
    def format(self, stream, args):
        char = args.next()
        if isinstance(char, Char):
            char = char.char
        elif not (isinstance(char, str) and len(char) == 1):
            raise TypeMismatch("~a requires a character, not ~w",
                               str(self), char)
        stream.write(char)

# Radix Control

class Numeric(Directive):
    """Base class for integer (radix control) directives."""

    def format(self, stream, args):
        n = args.next()
        if not isinstance(n, Integral) or isinstance(n, bool):
            raise TypeMismatch("~a requires an integer, not ~w", str(self), n)
        stream.write(("-" if n < 0 else "") + self.convert(abs(n)))

class Decimal(Numeric):
    def convert(self, n):
        return "%d" % n

octal_digits = ["000", "001", "010", "011", "100", "101", "110", "111"]

class Binary(Numeric):
    def convert(self, n):
        return "".join(octal_digits[int(digit)] \
                           for digit in "%o" % n).lstrip("0") or "0"

class Octal(Numeric):
    def convert(self, n):
        return "%o" % n

class Hexadecimal(Numeric):
    def convert(self, n):
        return "%x" % n

# Fixed-Format Floating-Point

def inexact(x):
    """Convert the real number x to a float, overflowing to infinity."""
    try:
        return float(x)
    except OverflowError:
        return math.inf if x > 0 else -math.inf

def fixed_real(x, digits):
    x = inexact(x)
    if math.isinf(x) or math.isnan(x):
        return number_to_string(x)

    # Round the shortest representation that reads back as x, rather than
    # the binary value itself; magnitudes that repr puts in exponential
    # notation keep their exponent.
    (mantissa, e, exponent) = repr(x).partition("e")
    context = decimal.Context(prec=len(mantissa) + digits + 1,
                              rounding=decimal.ROUND_HALF_UP)
    rounded = decimal.Decimal(mantissa).quantize(
        decimal.Decimal(1).scaleb(-digits), context=context)
    s = "{0:f}".format(rounded)
    if digits == 0:
        s += "."
    return s + e + exponent

def fixed(n, digits):
    """Return the number n as a string with exactly digits digits after the
    decimal point.  The real and imaginary parts of a complex number each
    get that many."""
    if isinstance(n, Complex) and not isinstance(n, Real):
        real = fixed_real(n.real, digits)
        imag = fixed_real(n.imag, digits)
        sign = "-" if imag.startswith("-") else "+"
        return "%s%s%si" % (real, sign, imag.lstrip("+-"))
    return fixed_real(n, digits)

class Fixed(Directive):
    parameters_allowed = 2

    def format(self, stream, args):
        width = self.param(0, 0)
        digits = self.param(1)
        arg = args.next()
        if isinstance(arg, str):
            s = arg
        elif isinstance(arg, Number) and not isinstance(arg, bool):
            s = number_to_string(arg) if digits is None else fixed(arg, digits)
        else:
            raise TypeMismatch("~a requires a number or a string, not ~w",
                               str(self), arg)
        stream.write(s.rjust(width))

# Printer Operations

class Printing(Directive):
    """Base class for directives that print their argument.  Subclasses
    give the printer variables to bind while printing."""

    variables = {}

    def format(self, stream, args):
        arg = args.next()
        with bindings(printervars, **self.variables):
            stream.write(pformat(arg, stream.charpos,
                                 printervars.print_right_margin or \
                                     stream.output_width))

class Aesthetic(Printing):
    variables = {"print_escape": False}

class Standard(Printing):
    variables = {"print_escape": True}

class Write(Printing):
    variables = {"print_escape": True, "print_circle": True}

class Pretty(Printing):
    variables = {"print_escape": True, "print_pretty": True}

# Control-Flow Operations

class Recursive(Directive):
    def format(self, stream, args):
        control = args.next()
        arglist = args.next()
        items = to_list(arglist)
        if items is None:
            raise TypeMismatch("~a requires a list of arguments, not ~w",
                               str(self), arglist)
        logger.debug("%s: %r with %d argument(s)", self, control, len(items))
        interpret(stream, control, Arguments(items))

format_directives = dict()

def register_directive(char, cls):
    assert len(char) == 1, "only single-character directives allowed"
    assert issubclass(cls, Directive), "invalid format directive class"
    format_directives[char.upper()] = format_directives[char.lower()] = cls

for (char, cls) in {
    "A": Aesthetic, "S": Standard, "W": Write, "Y": Pretty,
    "D": Decimal, "X": Hexadecimal, "O": Octal, "B": Binary,
    "C": Character, "F": Fixed, "?": Recursive, "K": Recursive,
    "~": Tilde, "T": Tab, "%": Newline, "&": FreshLine, "_": Space,
    "H": Help,
}.items():
    register_directive(char, cls)

parameter_chars = frozenset("0123456789,")

def parse_control_string(control, start=0):
    """Yield strings and Directive instances corresponding to the given
    control string, parsing only as far as the caller has consumed."""

    assert isinstance(control, str), "control string must be a string"
    assert start >= 0, "can't start parsing from end"

    i = start
    end = len(control)
    while i < end:
        tilde = control.find("~", i)
        if tilde == -1:
            yield control[i:end]
            break
        elif tilde > i:
            yield control[i:tilde]
        i = tilde + 1
        if i == end:
            raise MalformedDirective(control, tilde,
                                     "missing directive after ~~")

        # Parameters: ~w,dF, either of which may be omitted.
        mark = i
        while i < end and control[i] in parameter_chars:
            i += 1
        params = control[mark:i].split(",") if i > mark else []
        if i == end:
            raise MalformedDirective(control, i - 1,
                                     "unterminated directive parameters")
        char = control[i]
        if params and char not in "Ff":
            raise MalformedDirective(control, i,
                                     "parameters are only allowed for ~~F")
        try:
            cls = format_directives[char]
        except KeyError:
            raise MalformedDirective(control, i, "unknown format directive")
        i += 1
        try:
            d = cls(params, control, tilde, i)
        except FormatError as e:
            raise MalformedDirective(control, mark, e.control, *e.args)
        yield d

class Formatter(object):
    """A parsed control string, which may be applied to any number of
    argument lists."""

    def __init__(self, control):
        if not isinstance(control, str):
            raise TypeMismatch("control string must be a string, not ~w",
                               control)
        self.directives = tuple(parse_control_string(control))

    def __call__(self, stream, *args):
        if not isinstance(stream, CharposStream):
            stream = CharposStream(stream)
        return interpret(stream, self, Arguments(args))

def apply_directives(stream, directives, args):
    write = stream.write
    for x in directives:
        if isinstance(x, str):
            write(x)
        else:
            x.format(stream, args)

def interpret(stream, control, args):
    """Apply control, a string or Formatter, to args, writing the output to
    stream.  Every argument must be used."""
    if isinstance(control, Formatter):
        directives = control.directives
    elif isinstance(control, str):
        directives = parse_control_string(control)
    else:
        raise TypeMismatch("control string must be a string, not ~w", control)
    apply_directives(stream, directives, args)
    args.finish()
    return args

def format(destination, *args):
    """format([destination,] control, *args)

    With no destination, or a destination of None or False, return the
    output as a string.  With True, write it to standard output; with any
    other stream, write it there.  Writing to a CharposStream keeps track of
    the column across calls."""
    if isinstance(destination, (str, Formatter)):
        (destination, control) = (None, destination)
    elif args:
        (control, args) = (args[0], args[1:])
    else:
        raise TypeMismatch("missing control string")

    if destination is None or destination is False:
        stream = CharposStream(StringIO())
    elif destination is True:
        stream = CharposStream(sys.stdout)
    elif isinstance(destination, CharposStream):
        stream = destination
    else:
        stream = CharposStream(destination)
    interpret(stream, control, Arguments(args))
    if destination is None or destination is False:
        return stream.getvalue()
