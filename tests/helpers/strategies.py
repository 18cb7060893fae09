"""Hypothesis strategies for CAPABLE domain values."""

from datetime import timezone

from hypothesis import strategies as st

from capable.domain.entities import User

user_ids = st.integers(min_value=1, max_value=2**63 - 1)

emails = st.builds(
    "{}@{}.example".format,
    st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789._", min_size=1, max_size=20),
    st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=12),
)

created_ats = st.none() | st.datetimes(timezones=st.just(timezone.utc))

users = st.builds(
    User,
    id=user_ids,
    email=emails,
    admin=st.booleans(),
    active=st.booleans(),
    created_at=created_ats,
)
