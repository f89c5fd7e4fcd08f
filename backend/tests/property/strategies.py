"""
Hypothesis Strategies for Property-Based Testing

Custom strategies for generating secrets, object names and tokens.
"""

import string

from hypothesis import strategies as st

from sharelink.domain.file_storage.token_authority import TOKEN_LENGTH

HEX_DIGITS = "0123456789abcdef"


def secrets_() -> st.SearchStrategy[str]:
    """
    Generate non-empty shared secrets, including non-ASCII ones.

    NUL is excluded: HMAC zero-pads short keys, so "k" and "k\\x00" are the
    same key.
    """
    return st.text(
        alphabet=st.characters(blacklist_characters="\x00", blacklist_categories=("Cs",)),
        min_size=1,
        max_size=64,
    )


@st.composite
def generated_object_names(draw) -> str:
    """Generate names shaped like ``<32 hex>-<uuid4>``."""
    file_id = draw(st.text(alphabet=HEX_DIGITS, min_size=32, max_size=32))
    uuid_value = draw(st.uuids(version=4))
    return f"{file_id}-{uuid_value}"


def object_names() -> st.SearchStrategy[str]:
    """Generate arbitrary non-empty object names as well as generated-style ones."""
    return st.one_of(
        generated_object_names(),
        st.text(alphabet=string.ascii_letters + string.digits + "-_.", min_size=1, max_size=80),
        st.text(min_size=1, max_size=40),
    )


def hex_tokens() -> st.SearchStrategy[str]:
    """Generate well-formed but arbitrary hex tokens."""
    return st.text(alphabet=HEX_DIGITS, min_size=TOKEN_LENGTH, max_size=TOKEN_LENGTH)
