"""Binding stubs for the calculator library."""

from ffi_markers import native_name, blocking, log, deprecated


@native_name("native_add")
def add(a: int, b: int) -> int:
    """Add two integers."""


def subtract(a: int, b: int) -> int:
    """Subtract b from a."""


@log
@native_name("c_mul")
def multiply(a: int, b: int) -> int:
    pass


@blocking
def wait_for_result(timeout: float) -> None:
    """Block until the pending result is ready."""


@deprecated("use add")
@native_name("")
def legacy_add(a: int, b: int) -> int:
    pass


def _helper(x):
    return x
