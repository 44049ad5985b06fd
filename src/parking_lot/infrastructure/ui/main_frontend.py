import streamlit as st

from parking_lot.infrastructure.persistence.database import init_db

# Initialize database on startup
init_db()

st.set_page_config(
    page_title="Parking Lot Manager",
    page_icon="🅿️",
    layout="wide"
)

st.write("# 🅿️ Parking Lot Manager")

st.write(
    """Track slots, vehicle entries and exits, and billing for the facility.

## Pages:

### 🚦 Parking Dashboard
- **Entry / Exit**: park a vehicle (automatic or manual slot) and check it out with its fee
- **Locate**: find which slot a plate is parked in
- **Slot map**: live slot grid per level, click to toggle maintenance

### 💰 Revenue
- Total revenue and the list of completed sessions

Hourly parking is billed per started hour in tiers; a day pass is charged once at entry.
"""
)
