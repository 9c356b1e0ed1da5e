"""Embedded store access."""

from .engine import ExecutionEngine, ExecutionResult, create_store_engine, split_script

__all__ = [
    "ExecutionEngine",
    "ExecutionResult",
    "create_store_engine",
    "split_script",
]
