import pandas as pd
import streamlit as st

from parking_lot.config.settings_env import settings
from parking_lot.infrastructure.ui.services import get_revenue_summary


st.set_page_config(
    page_title="Revenue",
    page_icon="💰",
    layout="wide"
)

st.title("💰 Revenue")

summary = get_revenue_summary()

st.metric("Total Revenue", f"{settings.CURRENCY_SYMBOL} {summary.total_revenue:g}")

if summary.sessions:
    st.dataframe(pd.DataFrame([
        {
            "Number Plate": s.vehicle_number_plate,
            "Billing": s.billing_type.value,
            "Entry": s.entry_time.strftime("%Y-%m-%d %H:%M"),
            "Exit": s.exit_time.strftime("%Y-%m-%d %H:%M") if s.exit_time else "",
            "Amount": s.amount,
        }
        for s in summary.sessions
    ]), use_container_width=True)
else:
    st.info("No completed sessions yet")
