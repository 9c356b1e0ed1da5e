"""
SQL parameter binding utilities.

Values are always bound through named placeholders (``:p_0``, ``:p_1`` ...)
so identifiers in the statement text and values in the parameter mapping
never mix.
"""

from typing import Any, Dict, List


class ParameterSet:
    """
    Accumulates bound values and hands out placeholder names.

    Examples:
        >>> params = ParameterSet()
        >>> params.bind("abc123")
        ':p_0'
        >>> params.bind(1)
        ':p_1'
        >>> params.values
        {'p_0': 'abc123', 'p_1': 1}
    """

    def __init__(self, prefix: str = "p"):
        self.prefix = prefix
        self.values: Dict[str, Any] = {}

    def bind(self, value: Any) -> str:
        name = f"{self.prefix}_{len(self.values)}"
        self.values[name] = value
        return f":{name}"

    def bind_all(self, values: List[Any]) -> List[str]:
        return [self.bind(v) for v in values]

    def __len__(self) -> int:
        return len(self.values)

