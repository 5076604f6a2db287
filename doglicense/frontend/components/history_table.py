"""Component that renders the submitted applications table."""
from __future__ import annotations

from typing import List

import pandas as pd
import streamlit as st

from doglicense.api.schemas.application import SubmittedApplication

COLUMNS = ["id", "submittedAt", "status", "ownerName", "dogName", "dogBreed"]


def render_history(records: List[SubmittedApplication]) -> None:
    st.subheader("Submitted applications")
    if not records:
        st.info("No applications submitted yet.")
        return
    df = pd.DataFrame([record.to_storage() for record in records])
    st.dataframe(df[COLUMNS].sort_values("submittedAt", ascending=False), use_container_width=True, hide_index=True)
