"""
Data Transfer Objects for the headers application layer.

DTOs carry data between the composition root and the application layer.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FeatureFlags:
    """Which header stages are enabled for this process.

    Attributes:
        static_file_caching: Apply the static-file cache profile.
        https_everywhere: Emit Strict-Transport-Security on secure requests.
        security_headers: Emit the fixed anti-sniffing, download and
            anti-framing headers.
    """

    static_file_caching: bool = True
    https_everywhere: bool = True
    security_headers: bool = True
