"""
Port interfaces (ABCs) for the headers bounded context.

A header policy is one stage of the response pipeline. It decides
whether it applies to a response and which headers it contributes.
Policies never short-circuit later stages and keep no per-request state.
"""

from abc import ABC, abstractmethod
from typing import Mapping

from headerguard.domain.headers.entities import ResponseContext


class HeaderPolicy(ABC):
    """Port for a single response header stage."""

    #: Stable stage identifier, used for ordering and diagnostics.
    name: str = "header-policy"

    def applies_to(self, context: ResponseContext) -> bool:
        """Return True when this stage should touch ``context``."""
        return True

    @abstractmethod
    def headers_for(self, context: ResponseContext) -> Mapping[str, str]:
        """Return the headers this stage sets. Must not mutate ``context``."""
        raise NotImplementedError

    def apply(self, context: ResponseContext) -> ResponseContext:
        """Set this stage's headers on ``context`` when it applies.

        Headers already present under the same name are overwritten.
        """
        if self.applies_to(context):
            for header_name, header_value in self.headers_for(context).items():
                context.headers[header_name] = header_value
        return context

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
