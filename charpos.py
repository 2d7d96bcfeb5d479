import os
from array import array
from fcntl import ioctl
import termios

class CharposStream(object):
    """An output stream wrapper that keeps track of character positions
    relative to the beginning of the current line.

    This is the sink that format writes into: either an accumulating
    string stream, or any other stream whose output it forwards."""

    def __init__(self, stream, charpos=0):
        self.stream = stream
        self.charpos = charpos
        self.closed = False

    def close(self):
        if not self.closed:
            self.stream.close()
            self.closed = True

    def flush(self):
        self.stream.flush()

    def write(self, str):
        newline = str.rfind("\n")
        if newline == -1:
            self.charpos += len(str)
        else:
            self.charpos = len(str) - (newline + 1)
        self.stream.write(str)

    def terpri(self):
        self.stream.write("\n")
        self.charpos = 0

    def fresh_line(self):
        """Start a new line unless we're already at the start of one.
        Return true if a newline was written."""
        if not self.at_line_start:
            self.terpri()
            return True
        else:
            return False

    @property
    def at_line_start(self):
        return self.charpos == 0

    def getvalue(self):
        return self.stream.getvalue()

    @property
    def output_width(self):
        """The width of the underlying terminal: $COLUMNS if that holds a
        positive integer, else the window size, else 80."""
        try:
            width = int(os.environ.get("COLUMNS", ""))
        except ValueError:
            width = 0
        if width > 0:
            return width
        try:
            winsize = array("H", [0, 0, 0, 0])  # rows, columns, hsize, vsize
            ioctl(self.stream.fileno(), termios.TIOCGWINSZ, winsize)
            return winsize[1] or 80
        except (AttributeError, OSError, ValueError):
            return 80
