unbound = object()

class bindings(object):
    """Bind a set of variables to the given values in the dynamic scope of a
    with-statement.  The optional non-keyword argument is the module (or
    other object) whose variables are to be bound; if omitted, this module's
    globals are used.  Bindings nest, and are undone in reverse order on
    exit, even if the body raises."""

    def __init__(self, obj=None, **bindings):
        self.symbols = vars(obj) if obj is not None else globals()
        self.bindings = bindings
        self.saved = []

    def __enter__(self):
        old = {}
        for name, value in self.bindings.items():
            old[name] = self.symbols.get(name, unbound)
            self.symbols[name] = value
        self.saved.append(old)
        return self

    def __exit__(self, *exc_info):
        old = self.saved.pop()
        for name, value in old.items():
            if value is unbound:
                del self.symbols[name]
            else:
                self.symbols[name] = value
