"""Human readable names for classifier labels."""

from typing import Dict

LABEL_NAMES: Dict[str, str] = {
    "0": "Legitimate",
    "1": "SPAM",
    "2": "PHISHING",
}


def translate_label(label: str) -> str:
    """Map a raw class id to its display name; unknown labels pass through."""
    return LABEL_NAMES.get(label, label)
