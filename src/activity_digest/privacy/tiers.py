"""The four ordered disclosure levels."""

from __future__ import annotations

from enum import IntEnum

from activity_digest.exceptions import UnsupportedTierError


class PrivacyTier(IntEnum):
    """Higher value means less leaves the pipeline."""

    STANDARD = 1
    RETRIEVAL = 2
    CLASSIFIED = 3
    DEIDENTIFIED = 4

    @classmethod
    def parse(cls, value) -> PrivacyTier:
        """Accept a tier, its name, its rank, or a ``tier-<rank>-<name>`` label.

        Anything else raises `UnsupportedTierError`; there is no default tier.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise UnsupportedTierError(f"Unsupported privacy tier: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise UnsupportedTierError(f"Unsupported privacy tier: {value!r}") from None
        if isinstance(value, str):
            text = value.strip().lower()
            if text.startswith("tier-"):
                rank, _, name = text[5:].partition("-")
                tier = _by_name(name) if name else _by_rank(rank)
                if tier is not None and str(tier.value) == rank:
                    return tier
            elif text.isdigit():
                tier = _by_rank(text)
                if tier is not None:
                    return tier
            else:
                tier = _by_name(text)
                if tier is not None:
                    return tier
        raise UnsupportedTierError(f"Unsupported privacy tier: {value!r}")


# "rag" is the older name of the retrieval tier.
_ALIASES = {"rag": PrivacyTier.RETRIEVAL}


def _by_name(name: str) -> PrivacyTier | None:
    if name in _ALIASES:
        return _ALIASES[name]
    try:
        return PrivacyTier[name.upper()]
    except KeyError:
        return None


def _by_rank(rank: str) -> PrivacyTier | None:
    if not rank.isdigit():
        return None
    try:
        return PrivacyTier(int(rank))
    except ValueError:
        return None
