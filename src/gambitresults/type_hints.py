"""Type hints used in Gambit Results."""

from typing import Callable, Literal

# Result codes understood by the backend
ResultCode = Literal[
    "1-0",
    "0-1",
    "1/2-1/2",
    "*",
    "0-1F",
    "1-0F",
    "0-1D",
    "1-0D",
    "ADJ",
    "0-1T",
    "1-0T",
    "0-0",
    "CANC",
]

# Result classification tags
ResultType = Literal[
    "standard",
    "ongoing",
    "white_forfeit",
    "black_forfeit",
    "white_default",
    "black_default",
    "timeout",
    "adjourned",
    "double_forfeit",
    "cancelled",
]

# Free-text fields editable through set_field
EditableField = Literal["result_reason", "arbiter_notes"]

# Called with the reported exception
ErrorListener = Callable[[Exception], None]
# Called with the current modified count
ChangeListener = Callable[[int], None]
