"""Declaration passes: builder, session, and the script-facing entry points.

Architecture Note:
    builder/ is the stateful layer. Unlike core/ (stateless records and
    helpers), it owns an arena for the duration of one pass.
"""

from resgraph.builder.builder import ResourceGraphBuilder
from resgraph.builder.session import Catalog, GraphSession
from resgraph.builder.surface import Declarations

__all__ = [
    "ResourceGraphBuilder",
    "GraphSession",
    "Catalog",
    "Declarations",
]
