# Core type aliases for the Lox data model.
# Runtime values are plain Python objects:
# - numbers  -> float
# - strings  -> str
# - booleans -> bool
# - nil      -> lox.types.nil.Nil
# - functions -> LoxFunction / NativeFunction (lox.types.function)
#
# LoxValue is kept as an alias of Any so annotations stay readable without
# forcing a union over the function classes (which would create import cycles).

from typing import Any

# Runtime value alias
LoxValue = Any

__version__ = "0.1.0"
