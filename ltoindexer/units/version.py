"""
Version utility functions for the LTO Chain Indexer.

This module turns the VERSION tuple into the strings used by packaging and the API.
"""

from typing import Tuple


def get_version(version: Tuple[int, int, int, str, int]) -> str:
    """
    Return a PEP 440-compliant version number from a VERSION tuple.
    
    Args:
        version: Version tuple (major, minor, micro, releaselevel, serial)
        
    Returns:
        PEP 440-compliant version string
    """
    major, minor, micro, releaselevel, serial = version

    version_str = f"{major}.{minor}"
    if micro is not None:
        version_str += f".{micro}"

    if releaselevel != "final":
        if releaselevel == "dev":
            version_str += ".dev"
        else:
            version_str += {"alpha": "a", "beta": "b", "rc": "rc"}.get(releaselevel, releaselevel)
        if serial > 0:
            version_str += str(serial)

    return version_str
