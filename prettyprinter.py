"""The printer behind format's ~A, ~S, ~W, and ~Y directives.

Objects print in Scheme external representation: lists in parentheses,
tuples as vectors, symbols bare, and so on.  The printer variables in
printervars control escaping, line breaking, and the labelling of shared
structure."""

import sys
import math
import unicodedata
from collections import deque
from io import StringIO
from numbers import Number
from charpos import CharposStream
from bindings import bindings
from circle import LabelTable, is_compound
from datum import Symbol, Char, Pair, NIL
import printervars

__all__ = ["PrettyPrinter", "pformat", "pprint", "number_to_string"]

class Token(object):
    """Base class for prettyprinter tokens.

    Token instances should not be created directly by the user; the
    corresponding PrettyPrinter methods should be used instead."""

    size = 0

    def output(self, pp):
        """Send output to the given PrettyPrinter stream.

        These methods collectively correspond to Oppen's `print' routine."""
        pass

class Begin(Token):
    """Begin a logical block."""

    def __init__(self, prefix=""):
        self.prefix = prefix

    def output(self, pp):
        fits = self.size <= pp.space
        if self.prefix:
            pp._write(self.prefix)
        # Lines broken within the block are indented to just past the prefix.
        pp.printstack.append((pp.charpos, fits))

class End(Token):
    """End a logical block."""

    def __init__(self, suffix=""):
        self.suffix = suffix

    def output(self, pp):
        if self.suffix:
            pp._write(self.suffix)
        if pp.printstack:
            pp.printstack.pop()

class Newline(Token):
    """Base class for conditional newlines."""

    def __init__(self, blankspace=0):
        self.blankspace = blankspace

    def indent(self, pp, n):
        pp.terpri()
        pp._write(" " * n)

class Fill(Newline):
    def output(self, pp):
        (offset, fits) = pp.printstack[-1]
        if fits or self.size <= pp.space:
            pp._write(" " * self.blankspace)
        else:
            self.indent(pp, offset)

class String(Token):
    def __init__(self, string, size):
        self.string = string
        self.size = size

    def output(self, pp):
        pp._write(self.string)

class LogicalBlock(object):
    """A context manager for logical blocks."""

    def __init__(self, pp, prefix="", suffix=""):
        self.pp = pp
        self.prefix = prefix
        self.suffix = suffix

    def __enter__(self):
        self.pp.begin(prefix=self.prefix)
        return self

    def __exit__(self, type, value, traceback):
        self.pp.end(suffix=self.suffix)

# External representations of atoms

char_names = {
    "\x00": "null", "\x07": "alarm", "\x08": "backspace", "\t": "tab",
    "\n": "newline", "\r": "return", "\x1b": "escape", " ": "space",
    "\x7f": "delete",
}

string_escapes = {
    "\\": "\\\\", "\"": "\\\"", "\a": "\\a", "\b": "\\b", "\t": "\\t",
    "\n": "\\n", "\r": "\\r",
}

symbol_delimiters = frozenset("()\"';`|#")

def control_char(char):
    return unicodedata.category(char) == "Cc"

def char_literal(char):
    if char in char_names:
        return "#\\" + char_names[char]
    elif control_char(char):
        return "#\\x%x" % ord(char)
    else:
        return "#\\" + char

def string_literal(s):
    def escape(char):
        if char in string_escapes:
            return string_escapes[char]
        elif control_char(char):
            return "\\x%x;" % ord(char)
        else:
            return char
    return "\"%s\"" % "".join(escape(char) for char in s)

def symbol_literal(name):
    """Symbols whose names wouldn't read back as a symbol go in bars."""
    if name and name != "." and \
            not any(c.isspace() or c in symbol_delimiters for c in name):
        return name
    return "|%s|" % name.replace("\\", "\\\\").replace("|", "\\|")

def number_to_string(n):
    """Return the external representation of the number n."""
    if isinstance(n, float):
        if math.isnan(n):
            return "+nan.0"
        elif math.isinf(n):
            return "+inf.0" if n > 0 else "-inf.0"
        return repr(n)
    elif isinstance(n, complex):
        real = number_to_string(n.real)
        imag = number_to_string(n.imag)
        return "%s%s%si" % (real, "" if imag[0] in "+-" else "+", imag)
    else:
        return str(n)

class PrettyPrinter(CharposStream):
    def __init__(self, stream=sys.stdout, width=None, charpos=None):
        """Pretty-print to stream, with right margin at width characters,
        starting at position charpos."""
        if not stream:
            raise RuntimeError("pretty-printing to nowhere")
        self.stream = stream
        self.closed = False
        if width is None:
            width = printervars.print_right_margin
        self.margin = self.output_width if width is None else int(width)
        if self.margin <= 0:
            raise ValueError("margin must be positive")
        if charpos is None:
            try:
                charpos = stream.charpos
            except AttributeError:
                charpos = 0

        self.space = self.margin - charpos
        self.scanstack = deque()
        self.printstack = list()
        self.queue = list()
        self.labels = None

    def write(self, string):
        """Enqueue a string for output."""
        assert not self.closed, "I/O operation on closed stream"
        l = len(string)
        stack = self.scanstack
        if not stack:
            self._write(string)
        else:
            q = self.queue[-1]
            if isinstance(q, String):
                # Don't create a seperate token; merge with the last one.
                q.string += string
                q.size += l
            else:
                tok = String(string, l)
                self.queue.append(tok)
            self.rightotal += l
            while self.rightotal - self.leftotal > self.space:
                stack.popleft().size = 999999   # infinity
                self.flush()

    def begin(self, prefix=""):
        """Begin a new logical block."""
        assert not self.closed, "I/O operation on closed stream"
        stack = self.scanstack
        if not stack:
            self.leftotal = self.rightotal = 1
            assert not self.queue, "queue should be empty"
        tok = Begin(prefix)
        tok.size = -self.rightotal
        self.queue.append(tok)
        self.rightotal += len(tok.prefix)
        stack.append(tok)

    def end(self, suffix=""):
        """End the current logical block."""
        assert not self.closed, "I/O operation on closed stream"
        tok = End(suffix)
        stack = self.scanstack
        if not stack:
            tok.output(self)
        else:
            self.queue.append(tok)
            self.rightotal += len(tok.suffix)

            top = stack.pop()
            top.size += self.rightotal
            if isinstance(top, Newline) and stack:
                top = stack.pop()
                top.size += self.rightotal
            if not stack:
                self.flush()

    def newline(self, blankspace=0):
        """Enqueue a fill-style conditional newline, which prints as
        blankspace spaces unless the next section won't fit on the line."""
        assert not self.closed, "I/O operation on closed stream"
        stack = self.scanstack
        if not stack:
            self.leftotal = self.rightotal = 1
            assert not self.queue, "queue should be empty"
        else:
            top = stack[-1]
            if isinstance(top, Newline):
                top.size += self.rightotal
                stack.pop()
        tok = Fill(blankspace)
        tok.size = -self.rightotal
        self.queue.append(tok)
        stack.append(tok)
        if blankspace:
            self.rightotal += blankspace

    def logical_block(self, prefix="", suffix=""):
        """Return a context manager for a new logical block."""
        assert not self.closed, "I/O operation on closed stream"
        return LogicalBlock(self, prefix, suffix)

    def separate(self):
        """Separate the elements of a list or vector."""
        if printervars.print_pretty:
            self.newline(blankspace=1)
        else:
            self.write(" ")

    def pprint(self, obj):
        """Print the given object.  If print_circle is true, shared and
        circular structure is labelled."""
        assert not self.closed, "I/O operation on closed stream"
        if printervars.print_circle and self.labels is None:
            self.labels = LabelTable(obj)
            try:
                self._pprint(obj)
            finally:
                self.labels = None
        else:
            self._pprint(obj)

    def _pprint(self, obj):
        labels = self.labels
        if labels and is_compound(obj):
            tag = labels.tag(obj)
            if tag:
                self.write(tag)
                if tag.endswith("#"):
                    return

        escape = printervars.print_escape
        if obj is True:
            self.write("#t")
        elif obj is False:
            self.write("#f")
        elif isinstance(obj, str):
            self.write(string_literal(obj) if escape else obj)
        elif isinstance(obj, Symbol):
            self.write(symbol_literal(obj.name) if escape else obj.name)
        elif isinstance(obj, Char):
            self.write(char_literal(obj.char) if escape else obj.char)
        elif isinstance(obj, Number):
            self.write(number_to_string(obj))
        elif obj is NIL:
            self.write("()")
        elif isinstance(obj, Pair):
            with self.logical_block(prefix="(", suffix=")"):
                self._pprint(obj.car)
                tail = obj.cdr
                while tail is not NIL:
                    self.separate()
                    if isinstance(tail, Pair) and \
                            not (labels and tail in labels):
                        self._pprint(tail.car)
                        tail = tail.cdr
                    else:
                        # Improper list, or a tail that has to be labelled.
                        self.write(". ")
                        self._pprint(tail)
                        break
        elif isinstance(obj, (list, tuple)):
            prefix = "(" if isinstance(obj, list) else "#("
            with self.logical_block(prefix=prefix, suffix=")"):
                for (i, x) in enumerate(obj):
                    if i:
                        self.separate()
                    self._pprint(x)
        else:
            self.write(repr(obj) if escape else str(obj))

    def flush(self):
        """Output as many queue entries as possible."""
        assert not self.closed, "I/O operation on closed stream"
        queue = self.queue
        i = 0
        total = 0
        for q in queue:
            if q.size < 0:
                break
            q.output(self)
            total += q.size
            i += 1
        if i > 0:
            self.queue = queue[i:]
            self.leftotal += total

    def close(self):
        if not self.closed:
            self.flush()
            assert not self.queue, "leftover items in output queue"
            assert not self.scanstack, "leftover items on scan stack"
            assert not self.printstack, "leftover items on print stack"
            self.closed = True

    def terpri(self):
        assert not self.closed, "I/O operation on closed stream"
        self.stream.write("\n")
        self.space = self.margin

    @property
    def charpos(self):
        return self.margin - self.space

    def _write(self, str):
        (before, newline, after) = str.partition("\n")
        self.stream.write(before)
        if newline:
            self.terpri()
            self._write(after)
        else:
            self.space -= len(before)

def pformat(obj, charpos=0, width=None):
    """Return the printed representation of obj as a string, laid out as if
    it were printed starting at column charpos."""
    stream = StringIO()
    pp = PrettyPrinter(stream, width=width, charpos=charpos)
    pp.pprint(obj)
    pp.close()
    return stream.getvalue()

def pprint(obj, stream=None, width=None):
    pp = PrettyPrinter(sys.stdout if stream is None else stream, width=width)
    with bindings(printervars, print_pretty=True, print_escape=True):
        pp.pprint(obj)
    pp.terpri()
    pp.close()
