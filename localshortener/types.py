from typing import Any, TypeAlias
from collections.abc import Callable


# Type aliases for serialized data
RecordDict: TypeAlias = dict[str, Any]
ClickEventDict: TypeAlias = dict[str, Any]
AppConfig: TypeAlias = dict[str, Any]

# Type aliases for controller callbacks
NavigateCallback: TypeAlias = Callable[[str], None]
