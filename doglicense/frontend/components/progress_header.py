"""Progress bar and step indicators."""
from __future__ import annotations

import streamlit as st

from doglicense.api.services.validation import STEPS
from doglicense.api.services.wizard import ApplicationWizard


def render_progress(wizard: ApplicationWizard) -> None:
    col_step, col_pct = st.columns(2)
    col_step.caption(f"Step {wizard.step} of {len(STEPS)}")
    col_pct.caption(f"{round(wizard.progress)}% Complete")
    st.progress(int(wizard.progress))

    for col, step in zip(st.columns(len(STEPS)), STEPS):
        if step.id == wizard.step:
            col.markdown(f"**:blue[{step.id}. {step.title}]**")
        elif step.id < wizard.step:
            col.markdown(f":green[✓ {step.title}]")
        else:
            col.markdown(f":gray[{step.id}. {step.title}]")
