# Gambit Pairing
# Copyright (C) 2025  Gambit Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

# --- Constants ---
GAMES_FILE_EXTENSION = ".json"

# Standard result codes
RESULT_WHITE_WIN = "1-0"
RESULT_BLACK_WIN = "0-1"
RESULT_DRAW = "1/2-1/2"
RESULT_ONGOING = "*"  # Ongoing sentinel, never validated remotely

# Special result codes
RESULT_WHITE_FORFEIT = "0-1F"  # White forfeited, black wins
RESULT_BLACK_FORFEIT = "1-0F"  # Black forfeited, white wins
RESULT_WHITE_DEFAULT = "0-1D"
RESULT_BLACK_DEFAULT = "1-0D"
RESULT_ADJOURNED = "ADJ"
RESULT_WHITE_TIMEOUT = "0-1T"  # White lost on time
RESULT_BLACK_TIMEOUT = "1-0T"  # Black lost on time
RESULT_DOUBLE_FORFEIT = "0-0"
RESULT_CANCELLED = "CANC"

# Backend vocabulary as (code, label) pairs, in display order
RESULT_CODES = [
    (RESULT_WHITE_WIN, "White wins"),
    (RESULT_BLACK_WIN, "Black wins"),
    (RESULT_DRAW, "Draw"),
    (RESULT_ONGOING, "Ongoing"),
    (RESULT_WHITE_FORFEIT, "White forfeit"),
    (RESULT_BLACK_FORFEIT, "Black forfeit"),
    (RESULT_WHITE_DEFAULT, "White default"),
    (RESULT_BLACK_DEFAULT, "Black default"),
    (RESULT_ADJOURNED, "Adjourned"),
    (RESULT_WHITE_TIMEOUT, "Timeout (White)"),
    (RESULT_BLACK_TIMEOUT, "Timeout (Black)"),
    (RESULT_DOUBLE_FORFEIT, "Double forfeit"),
    (RESULT_CANCELLED, "Cancelled"),
]
VALID_RESULT_CODES = frozenset(code for code, _ in RESULT_CODES)

# Result type tags
TYPE_STANDARD = "standard"
TYPE_ONGOING = "ongoing"
TYPE_WHITE_FORFEIT = "white_forfeit"
TYPE_BLACK_FORFEIT = "black_forfeit"
TYPE_WHITE_DEFAULT = "white_default"
TYPE_BLACK_DEFAULT = "black_default"
TYPE_TIMEOUT = "timeout"
TYPE_ADJOURNED = "adjourned"
TYPE_DOUBLE_FORFEIT = "double_forfeit"
TYPE_CANCELLED = "cancelled"

# Result types an arbiter has to sign off
APPROVAL_RESULT_TYPES = frozenset(
    {
        TYPE_WHITE_FORFEIT,
        TYPE_BLACK_FORFEIT,
        TYPE_WHITE_DEFAULT,
        TYPE_BLACK_DEFAULT,
        TYPE_DOUBLE_FORFEIT,
        TYPE_CANCELLED,
    }
)

# Result codes the backend refuses without an acting arbiter
APPROVAL_RESULT_CODES = frozenset(
    {
        RESULT_WHITE_FORFEIT,
        RESULT_BLACK_FORFEIT,
        RESULT_WHITE_DEFAULT,
        RESULT_BLACK_DEFAULT,
        RESULT_DOUBLE_FORFEIT,
        RESULT_CANCELLED,
    }
)

# Result types the backend accepts alongside each code
COMPATIBLE_RESULT_TYPES = {
    RESULT_WHITE_WIN: (TYPE_STANDARD, TYPE_BLACK_FORFEIT, TYPE_BLACK_DEFAULT),
    RESULT_BLACK_WIN: (TYPE_STANDARD, TYPE_WHITE_FORFEIT, TYPE_WHITE_DEFAULT),
    RESULT_DRAW: (TYPE_STANDARD,),
    RESULT_ONGOING: (TYPE_ONGOING,),
    RESULT_WHITE_FORFEIT: (TYPE_WHITE_FORFEIT,),
    RESULT_BLACK_FORFEIT: (TYPE_BLACK_FORFEIT,),
    RESULT_WHITE_DEFAULT: (TYPE_WHITE_DEFAULT,),
    RESULT_BLACK_DEFAULT: (TYPE_BLACK_DEFAULT,),
    RESULT_ADJOURNED: (TYPE_ADJOURNED,),
    RESULT_WHITE_TIMEOUT: (TYPE_TIMEOUT,),
    RESULT_BLACK_TIMEOUT: (TYPE_TIMEOUT,),
    RESULT_DOUBLE_FORFEIT: (TYPE_DOUBLE_FORFEIT,),
    RESULT_CANCELLED: (TYPE_CANCELLED,),
}

# Messages
VALIDATION_FAILED_MESSAGE = "validation failed"
CSV_IMPORT_NOTE = "Imported from CSV row {row}"

# Batch operation kinds guarded against re-entrant calls
OP_BATCH_VALIDATE = "batch_validate"
OP_SAVE_ALL = "save_all"

# Environment variable overriding the package log level
LOG_LEVEL_ENV_VAR = "GAMBIT_RESULTS_LOG_LEVEL"
