"""
The composed header pipeline.

An immutable, ordered sequence of named header policies. Every response
runs through all stages in declared order against the same ResponseContext.
"""

from typing import Iterable, Iterator

from headerguard.domain.headers.entities import ResponseContext
from headerguard.domain.headers.ports import HeaderPolicy


class HeaderPipeline:
    """Runs header policies in order.

    Stages are ``(name, policy)`` pairs; the name is the one the stage was
    declared under, not the policy's own ``name`` attribute.
    Later stages overwrite headers set by earlier stages on a name clash,
    so the declared order is part of the contract.
    """

    def __init__(self, stages: Iterable[tuple[str, HeaderPolicy]] = ()) -> None:
        self._stages = tuple(stages)

    @property
    def stages(self) -> tuple[HeaderPolicy, ...]:
        return tuple(policy for _, policy in self._stages)

    @property
    def stage_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self._stages)

    def apply(self, context: ResponseContext) -> ResponseContext:
        """Run every stage against ``context`` and return it."""
        for _, policy in self._stages:
            policy.apply(context)
        return context

    __call__ = apply

    def __iter__(self) -> Iterator[HeaderPolicy]:
        return iter(self.stages)

    def __len__(self) -> int:
        return len(self._stages)

    def __repr__(self) -> str:
        return f"HeaderPipeline({list(self.stage_names)!r})"
