"""SQL statement builder mixins."""

from sqlforge.builder.mixins._join import FromJoinMixin
from sqlforge.builder.mixins._limit_offset import LimitOffsetClauseMixin
from sqlforge.builder.mixins._merge import MergeMixin
from sqlforge.builder.mixins._options import OptionsMixin
from sqlforge.builder.mixins._order_by import GroupByMixin, OrderByMixin
from sqlforge.builder.mixins._select_columns import SelectColumnsMixin
from sqlforge.builder.mixins._targets import TargetTableMixin
from sqlforge.builder.mixins._update_set import SetValuesMixin
from sqlforge.builder.mixins._where import HavingClauseMixin, WhereClauseMixin

__all__ = (
    "FromJoinMixin",
    "GroupByMixin",
    "HavingClauseMixin",
    "LimitOffsetClauseMixin",
    "MergeMixin",
    "OptionsMixin",
    "OrderByMixin",
    "SelectColumnsMixin",
    "SetValuesMixin",
    "TargetTableMixin",
    "WhereClauseMixin",
)
