"""Tracking view for a submitted application."""
from __future__ import annotations

import streamlit as st

from doglicense.api.repositories.application_repo import SubmissionListCorruptedError
from doglicense.api.services.application_service import ApplicationNotFoundError, application_service
from doglicense.frontend.components import history_table
from doglicense.frontend.utils import state

st.set_page_config(page_title="Track Application", layout="centered")
st.title("Track Your Application")

repo = state.build_repository()
application_id = st.query_params.get("id") or st.session_state.get("tracking_id")
application_id = st.text_input("Application ID", value=application_id or "", placeholder="DOG-...")

if application_id:
    st.query_params["id"] = application_id
    try:
        record = application_service.get_application(repo, application_id)
    except SubmissionListCorruptedError as exc:
        st.error(f"Stored applications could not be read: {exc}")
        st.stop()
    except ApplicationNotFoundError:
        st.warning(f"No application found with ID {application_id}.")
    else:
        st.markdown(f"**Status:** {record.status}")
        st.markdown(f"**Submitted:** {record.submitted_at:%Y-%m-%d %H:%M} UTC")
        st.markdown(f"**Owner:** {record.owner_name}")
        st.markdown(f"**Dog:** {record.dog_name} ({record.dog_breed}, {record.dog_color}, {record.dog_age} years)")
        st.markdown(f"**Last Rabies Shot:** {record.last_rabies_shot_date}")
        if record.vaccination_certificate is not None:
            st.markdown(f"**Certificate:** {record.vaccination_certificate.name}")

try:
    records = application_service.list_applications(repo)
except SubmissionListCorruptedError as exc:
    st.error(f"Stored applications could not be read: {exc}")
else:
    history_table.render_history(records)
