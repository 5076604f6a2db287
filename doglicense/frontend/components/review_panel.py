"""Read-only summary shown on the last step."""
from __future__ import annotations

import streamlit as st

from doglicense.api.services.wizard import ApplicationWizard


def render_review(wizard: ApplicationWizard) -> None:
    draft = wizard.draft
    st.subheader("Review Your Application")
    col1, col2 = st.columns(2)
    col1.markdown(f"**Owner Name:** {draft.owner_name}")
    col2.markdown(f"**Phone:** {draft.owner_phone}")
    st.markdown(f"**Address:** {draft.owner_address}")
    col3, col4 = st.columns(2)
    col3.markdown(f"**Dog Name:** {draft.dog_name}")
    col4.markdown(f"**Breed:** {draft.dog_breed}")
    col3.markdown(f"**Age:** {draft.dog_age} years")
    col4.markdown(f"**Color:** {draft.dog_color}")
    st.markdown(f"**Last Rabies Shot:** {draft.last_rabies_shot_date}")
    if wizard.certificate is not None:
        st.markdown(f"**Certificate:** {wizard.certificate.name}")
    if wizard.errors:
        st.error("\n".join(f"- {message}" for message in wizard.errors.values()))
    st.info(
        "By submitting this application, you confirm that all information provided is accurate and complete. "
        "You will receive an application ID for tracking purposes."
    )
