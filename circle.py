"""Detection of shared and circular structure.

The printer labels a compound object that occurs more than once in the
object graph: the first occurrence prints as #n=<datum>, and every later one
as #n#.  Finding those objects takes a separate pass over the graph before
anything is printed."""

from datum import Pair

__all__ = ["is_compound", "find_shared", "LabelTable"]

def is_compound(obj):
    """Only non-empty pairs, lists, and vectors can be shared; everything
    else prints as an atom."""
    if isinstance(obj, Pair):
        return True
    return isinstance(obj, (list, tuple)) and len(obj) > 0

def find_shared(obj):
    """Return the compound objects reachable from obj more than once, in the
    order in which each was first found to be shared."""
    seen = set()
    shared = []
    marked = set()

    def visit(x):
        # Walk down the cdrs of a pair chain iteratively, so that long lists
        # don't recurse.
        while is_compound(x):
            key = id(x)
            if key in seen:
                # Labels are numbered in this order, which need not match
                # the order in which the printer first reaches each object.
                if key not in marked:
                    marked.add(key)
                    shared.append(x)
                return
            seen.add(key)
            if isinstance(x, Pair):
                visit(x.car)
                x = x.cdr
            else:
                for y in x:
                    visit(y)
                return

    visit(obj)
    return shared

class LabelTable(object):
    """Labels for the shared objects of one object graph, and a record of
    which of them have been printed so far."""

    def __init__(self, obj):
        shared = find_shared(obj)
        # Hold on to the objects themselves; their ids are only unique while
        # they're alive.
        self.objects = shared
        self.labels = dict((id(x), i) for (i, x) in enumerate(shared, 1))
        self.printed = set()

    def __len__(self):
        return len(self.labels)

    def __contains__(self, obj):
        return id(obj) in self.labels

    def tag(self, obj):
        """Return the prefix to print for obj: "#n=" the first time a
        labelled object is printed, "#n#" every time after that, or None if
        obj is unlabelled."""
        n = self.labels.get(id(obj))
        if n is None:
            return None
        elif n in self.printed:
            return "#%d#" % n
        else:
            self.printed.add(n)
            return "#%d=" % n
