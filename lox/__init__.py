# Core type aliases for Lox's runtime model.
# Runtime values are plain Python objects:
#   Number -> float, String -> str, Boolean -> bool, nil -> the Nil singleton,
#   Callable -> LoxCallable (user functions and host-native functions).
#
# Naming guidance:
# - LoxValue: use in evaluator/runtime code to denote evaluated values.
# - SourceText: raw program text handed to the scanner.

from typing import Any, Callable

# Runtime value alias
LoxValue = Any

SourceText = str

# Host function signature accepted by NativeFunction
NativeFn = Callable[..., LoxValue]
