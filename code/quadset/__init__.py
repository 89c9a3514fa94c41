from ._version import __version__
from .errors import InvalidNodeOperation, QuadSetError
from .index import QuadPoint, QuadPointView, QuadTree, TupleView, build_quadtree

__all__ = (
    "__version__",
    "QuadTree",
    "QuadPoint",
    "QuadPointView",
    "TupleView",
    "build_quadtree",
    "QuadSetError",
    "InvalidNodeOperation",
)
