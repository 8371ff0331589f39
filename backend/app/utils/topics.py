"""
Canonical encoding for contact-form topics.

Topics arrive as zero or more form values and are stored in a single text
column joined with ", ". The encoding is lossy: a topic that itself contains
the separator cannot be told apart from two topics.
"""
from typing import Optional, Sequence, Union

TOPIC_SEPARATOR = ", "


def join_topics(topics: Optional[Union[str, Sequence[str]]]) -> str:
    """
    Flatten selected topics into the stored text form.

    - None or [] -> ""
    - ["billing", "support"] -> "billing, support"
    - "billing" (a single scalar form value) -> "billing"
    """
    if topics is None:
        return ""
    if isinstance(topics, str):
        return topics
    return TOPIC_SEPARATOR.join(str(t) for t in topics)

