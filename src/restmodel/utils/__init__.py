from .formatting import english_enumerate  # noqa
from .typing import assert_not_none, is_plain_sequence, split_names  # noqa
