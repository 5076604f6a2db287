"""Inputs for the data-entry steps, wired to the wizard's autosave."""
from __future__ import annotations

from typing import Dict, Tuple

import streamlit as st

from doglicense.api.schemas.application import CERTIFICATE_FIELD, CertificateFile
from doglicense.api.services.validation import fields_for_step
from doglicense.api.services.wizard import ApplicationWizard

# field -> (label, placeholder, help text)
FIELD_META: Dict[str, Tuple[str, str, str]] = {
    "owner_name": ("Full Name *", "Enter your full name", "Your legal name as it appears on official documents"),
    "owner_address": (
        "Residential Address *",
        "Enter your complete address",
        "Include street address, city, state, and ZIP code",
    ),
    "owner_phone": ("Phone Number *", "(555) 123-4567", "10-digit US phone number for contact purposes"),
    "dog_name": ("Dog's Name *", "Enter your dog's name", "The name you use to call your dog"),
    "dog_breed": ("Breed *", "e.g., Golden Retriever, Mixed Breed", 'Primary breed or "Mixed Breed" if unknown'),
    "dog_age": ("Age (in years) *", "e.g., 3", "Your dog's age in years (approximate is fine)"),
    "dog_color": ("Primary Color *", "e.g., Brown, Black, Golden", "Main color of your dog's coat"),
    "last_rabies_shot_date": ("Last Rabies Vaccination Date *", "YYYY-MM-DD", "Must be within the last 3 years"),
}
CERTIFICATE_HELP = "Upload PDF or image file (max 5MB). Must show current rabies vaccination."


def widget_key(name: str) -> str:
    return f"field_{name}"


def clear_widgets() -> None:
    """Forget widget values so the next run re-reads them from the wizard."""

    for name in list(FIELD_META) + [CERTIFICATE_FIELD]:
        st.session_state.pop(widget_key(name), None)


def _on_change(wizard: ApplicationWizard, name: str) -> None:
    wizard.update_field(name, st.session_state[widget_key(name)])


def _on_upload(wizard: ApplicationWizard) -> None:
    upload = st.session_state.get(widget_key(CERTIFICATE_FIELD))
    wizard.set_certificate(CertificateFile.from_upload(upload) if upload is not None else None)


def _render_text(wizard: ApplicationWizard, name: str) -> None:
    label, placeholder, help_text = FIELD_META[name]
    key = widget_key(name)
    if key not in st.session_state:
        st.session_state[key] = getattr(wizard.draft, name)
    st.text_input(label, key=key, placeholder=placeholder, help=help_text, on_change=_on_change, args=(wizard, name))
    if name in wizard.errors:
        st.error(wizard.errors[name])


def _render_certificate(wizard: ApplicationWizard) -> None:
    st.file_uploader(
        "Vaccination Certificate *",
        type=["pdf", "jpg", "jpeg", "png"],
        key=widget_key(CERTIFICATE_FIELD),
        help=CERTIFICATE_HELP,
        on_change=_on_upload,
        args=(wizard,),
    )
    if wizard.certificate is not None:
        st.caption(f"Attached: {wizard.certificate.name} ({wizard.certificate.size / 1024:.0f} KB)")
    if CERTIFICATE_FIELD in wizard.errors:
        st.error(wizard.errors[CERTIFICATE_FIELD])


def render_step(wizard: ApplicationWizard) -> None:
    for name in fields_for_step(wizard.step):
        if name == CERTIFICATE_FIELD:
            _render_certificate(wizard)
        else:
            _render_text(wizard, name)
