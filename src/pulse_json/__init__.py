"""ECMAScript ``JSON.stringify`` / ``JSON.parse`` for Python values."""

# Errors
from pulse_json.errors import CircularStructureError as CircularStructureError
from pulse_json.errors import InternalInvariantError as InternalInvariantError
from pulse_json.errors import JSONError as JSONError
from pulse_json.errors import JSONSyntaxError as JSONSyntaxError
from pulse_json.errors import OutOfBoundStringError as OutOfBoundStringError
from pulse_json.errors import StackOverflowError as StackOverflowError

# Host object model
from pulse_json.host import DEFAULT_HOST as DEFAULT_HOST
from pulse_json.host import Host as Host

# Entry points
from pulse_json.parse import parse as parse
from pulse_json.stringify import stringify as stringify

# JS values
from pulse_json.values import Boxed as Boxed
from pulse_json.values import JSArrayLike as JSArrayLike
from pulse_json.values import JSFunction as JSFunction
from pulse_json.values import JSObject as JSObject
from pulse_json.values import Symbol as Symbol
from pulse_json.values import TypeKind as TypeKind
from pulse_json.values import Undefined as Undefined
from pulse_json.values import undefined as undefined

__version__ = "0.1.0"
