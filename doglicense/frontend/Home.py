"""Streamlit entrypoint for the dog license application wizard."""
from __future__ import annotations

import time

import streamlit as st

from doglicense.api.core.config import settings
from doglicense.api.core.logging import setup_logging
from doglicense.frontend.components import progress_header, review_panel, step_fields
from doglicense.frontend.utils import state

TOASTS = {"info": "ℹ️", "success": "✅", "error": "⚠️"}

setup_logging(settings.log_level.upper())
st.set_page_config(page_title="Dog License Application", layout="centered")
st.title("Dog License Application")
st.caption("Complete all steps to register your dog")

license_state = state.get_state(st.session_state)
wizard = license_state.wizard


def _go_back() -> None:
    wizard.prev_step()


def _go_next() -> None:
    wizard.next_step()


def _submit() -> None:
    with st.spinner("Submitting..."):
        outcome = wizard.submit()
    if outcome is not None:
        license_state.last_outcome = outcome
        step_fields.clear_widgets()


progress_header.render_progress(wizard)

st.subheader(wizard.current.title)
st.caption(wizard.current.description)

if wizard.is_last_step:
    review_panel.render_review(wizard)
else:
    step_fields.render_step(wizard)

col_prev, col_next = st.columns(2)
col_prev.button("Previous", on_click=_go_back, disabled=wizard.step == 1)
if wizard.is_last_step:
    col_next.button("Submit Application", on_click=_submit, type="primary")
else:
    col_next.button("Next", on_click=_go_next, type="primary")

for note in wizard.drain_notifications():
    st.toast(note.message, icon=TOASTS[note.level])

if license_state.last_outcome is not None:
    outcome = license_state.last_outcome
    license_state.last_outcome = None
    st.success(f"Application ID: {outcome.application_id}. Redirecting to tracking...")
    time.sleep(outcome.redirect_delay_s)
    st.session_state.tracking_id = outcome.application_id
    st.switch_page("pages/Track_Application.py")
