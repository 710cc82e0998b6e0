from typing import Dict, Optional

from .object import Object


class Environment:
    """A lexical scope mapping names to values, chained to an enclosing scope.

    A function call gets a fresh environment whose ``outer`` is the
    environment the function was defined in. Links only ever point
    outward, so scopes form a tree and never a cycle.
    """
    def __init__(self, outer: Optional['Environment'] = None):
        self.outer = outer
        self.store: Dict[str, Object] = {}

    @classmethod
    def enclosed(cls, outer: 'Environment') -> 'Environment':
        return cls(outer)

    def get(self, name: str) -> Optional[Object]:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name: str, value: Object) -> Object:
        # let always binds in the innermost scope
        self.store[name] = value
        return value

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None
