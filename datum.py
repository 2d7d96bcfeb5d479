"""Scheme-style data for format arguments: symbols, characters, and pairs.

Python lists and tuples serve as proper lists and vectors; Pair chains are
needed only for improper (dotted) or deliberately circular lists."""

__all__ = ["Symbol", "Char", "Pair", "NIL", "cons", "make_list", "to_list"]

class Symbol(object):
    """An interned symbol.  Two symbols with the same name are the same
    object."""

    __slots__ = ("name",)
    table = {}

    def __new__(cls, name):
        try:
            return cls.table[name]
        except KeyError:
            symbol = super(Symbol, cls).__new__(cls)
            symbol.name = name
            cls.table[name] = symbol
            return symbol

    def __repr__(self):
        return "Symbol(%r)" % self.name

    def __str__(self):
        return self.name

class Char(object):
    """A character, distinct from a string of length one."""

    __slots__ = ("char",)

    def __init__(self, char):
        if not isinstance(char, str) or len(char) != 1:
            raise ValueError("expected a single character, not %r" % (char,))
        self.char = char

    def __eq__(self, other):
        return isinstance(other, Char) and self.char == other.char

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(self.char)

    def __repr__(self):
        return "Char(%r)" % self.char

    def __str__(self):
        return self.char

class Nil(object):
    """The empty list.  There is exactly one instance, NIL."""

    def __repr__(self):
        return "NIL"

    def __bool__(self):
        return False

    def __len__(self):
        return 0

    def __iter__(self):
        return iter(())

NIL = Nil()

class Pair(object):
    """A mutable cons cell."""

    __slots__ = ("car", "cdr")

    def __init__(self, car, cdr=NIL):
        self.car = car
        self.cdr = cdr

    def __repr__(self):
        return "Pair(%r, ...)" % (self.car,)

def cons(car, cdr):
    return Pair(car, cdr)

def make_list(*items, **kwargs):
    """Return a chain of pairs holding items, ending in tail (default NIL)."""
    tail = kwargs.pop("tail", NIL)
    if kwargs:
        raise TypeError("unexpected keyword arguments: %s" % ", ".join(kwargs))
    for item in reversed(items):
        tail = Pair(item, tail)
    return tail

def to_list(obj):
    """Return the elements of a list-like object as a Python list, or None
    if it isn't a proper list.  Lists and tuples are copied; pair chains must
    end in NIL and must not be circular."""
    if isinstance(obj, (list, tuple)):
        return list(obj)
    items = []
    seen = set()
    while isinstance(obj, Pair):
        if id(obj) in seen:
            return None
        seen.add(id(obj))
        items.append(obj.car)
        obj = obj.cdr
    return items if obj is NIL else None
