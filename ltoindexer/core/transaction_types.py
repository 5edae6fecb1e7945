"""
Static transaction type table.

Maps numeric transaction type tags to the type names used as keys of the
ranked transaction index and the transaction statistics.
"""

TRANSACTION_TYPES: dict[int, str] = {
    1: "genesis",
    4: "transfer",
    8: "lease",
    9: "lease_cancel",
    11: "mass_transfer",
    12: "anchor",
    13: "script",
    15: "anchor",
    16: "association",
    17: "association",
    18: "sponsorship",
    19: "sponsorship"
}

# Types that are also indexed under their recipient(s)
RECIPIENT_INDEXED_TYPES = frozenset({"transfer", "mass_transfer", "lease", "sponsorship"})

LEGACY_ANCHOR_TYPE = 12
NATIVE_ANCHOR_TYPE = 15
ASSOCIATION_INVOKE_TYPE = 16
ASSOCIATION_REVOKE_TYPE = 17

ASSOCIATION_TRANSACTION_TYPES = frozenset({ASSOCIATION_INVOKE_TYPE, ASSOCIATION_REVOKE_TYPE})


def get_type_name(type_tag: int) -> str | None:
    """Return the type name for a numeric tag, or None if the tag is unknown"""
    return TRANSACTION_TYPES.get(type_tag)


def get_type_names() -> list[str]:
    """Distinct type names, in table order"""
    return list(dict.fromkeys(TRANSACTION_TYPES.values()))
