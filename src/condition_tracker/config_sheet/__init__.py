"""Config document sync (catalog <-> editable table).

Serializes the condition catalog into a table embedded in the config
document, and parses GM edits to that table back into the catalog with
name corrections and a fixed-point check against rewrite loops.
"""

from condition_tracker.config_sheet.models import (
    ConditionRow,
    CorrectionReason,
    CorrectionWarning,
    SyncAction,
    SyncResult,
    ValidatedTable,
)
from condition_tracker.config_sheet.sync import ConfigTableSync
from condition_tracker.config_sheet.table_codec import (
    HtmlTableCodec,
    TableCodec,
    YamlTableCodec,
    get_table_codec,
)

__all__ = [
    "ConfigTableSync",
    "TableCodec",
    "HtmlTableCodec",
    "YamlTableCodec",
    "get_table_codec",
    "ConditionRow",
    "CorrectionReason",
    "CorrectionWarning",
    "SyncAction",
    "SyncResult",
    "ValidatedTable",
]
