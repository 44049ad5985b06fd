import time

import pandas as pd
import streamlit as st

from parking_lot.config.settings_env import settings
from parking_lot.application.services.parking_service import level_label
from parking_lot.domain.common import BillingType, SlotStatus, VehicleType
from parking_lot.domain.exceptions import ParkingError
from parking_lot.infrastructure.ui.services import call_parking_service


st.set_page_config(
    page_title="Parking Dashboard",
    page_icon="🚗",
    layout="wide"
)

st.title("🚗 Parking Dashboard")

CURRENCY = settings.CURRENCY_SYMBOL
STATUS_ICONS = {
    SlotStatus.AVAILABLE: "🟩",
    SlotStatus.OCCUPIED: "🟥",
    SlotStatus.MAINTENANCE: "🟨",
}

status = call_parking_service("get_parking_status")
slots = call_parking_service("get_slots")

col1, col2, col3, col4 = st.columns(4)
with col1:
    st.metric("Total Slots", status["total_slots"])
with col2:
    st.metric("Available", status["available_slots"])
with col3:
    st.metric("Occupied", status["occupied_slots"], delta=f"{status['occupancy_rate']}%")
with col4:
    st.metric("Maintenance", status["maintenance_slots"])

tab1, tab2, tab3 = st.tabs(["Entry / Exit", "Slot Map", "Occupancy"])

with tab1:
    col1, col2, col3 = st.columns(3)

    with col1:
        st.subheader("🚦 Vehicle Entry")
        with st.form("entry_form"):
            plate = st.text_input("Number Plate", placeholder="TN07CV7077")
            vehicle_type = st.selectbox("Vehicle Type", options=[e.value for e in VehicleType])
            slot_request = st.text_input("Slot (optional)", placeholder="G-R-012")
            billing_type = st.radio("Billing", options=[e.value for e in BillingType], horizontal=True)

            if st.form_submit_button("Park", type="primary"):
                try:
                    result = call_parking_service(
                        "register_vehicle_entry",
                        number_plate=plate,
                        vehicle_type=VehicleType(vehicle_type),
                        slot_request=slot_request.strip() or None,
                        billing_type=BillingType(billing_type),
                    )
                    message = f"✅ Parked at {result.slot_number} ({level_label(result.level)})"
                    if result.billing_type == BillingType.DAY_PASS:
                        message += f", fee {CURRENCY}{result.fee:g}"
                    st.success(message)
                    time.sleep(1)
                    st.rerun()
                except ParkingError as e:
                    st.error(f"❌ {e}")

    with col2:
        st.subheader("🚪 Vehicle Exit")
        with st.form("exit_form"):
            exit_plate = st.text_input("Number Plate", placeholder="TN07CV7077", key="exit_plate")

            if st.form_submit_button("Exit", type="primary"):
                try:
                    result = call_parking_service("register_vehicle_exit", exit_plate)
                    st.success(f"✅ {exit_plate.upper()} left {result.slot_number}")
                    st.info(f"Duration: {result.duration_minutes} min")
                    if result.already_collected:
                        st.info(f"💰 Day pass {CURRENCY}{result.fee:g} already collected")
                    else:
                        st.info(f"💰 Amount Due: {CURRENCY}{result.fee:g}")
                    time.sleep(2)
                    st.rerun()
                except ParkingError as e:
                    st.error(f"❌ {e}")

    with col3:
        st.subheader("🔎 Locate Vehicle")
        with st.form("locate_form"):
            search_plate = st.text_input("Number Plate", placeholder="TN07CV7077", key="locate_plate")

            if st.form_submit_button("Search"):
                try:
                    found = call_parking_service("locate_vehicle", search_plate)
                    if found.found:
                        st.success(f"{search_plate.upper()} → {found.slot_number} ({level_label(found.level)})")
                    else:
                        st.error("Vehicle not found")
                except ParkingError as e:
                    st.error(f"❌ {e}")

with tab2:
    st.caption("🟩 Available  🟥 Occupied  🟨 Maintenance. Click a free or maintenance slot to toggle maintenance")
    by_level = {}
    for slot in slots:
        by_level.setdefault(slot.level, []).append(slot)

    for level in sorted(by_level):
        st.subheader(level_label(level))
        columns = st.columns(10)
        for i, slot in enumerate(by_level[level]):
            label = f"{STATUS_ICONS[slot.status]} {slot.slot_number}"
            if slot.current_plate:
                label += f"\n{slot.current_plate}"
            with columns[i % 10]:
                if st.button(label, key=f"slot_{slot.slot_id}", disabled=slot.status == SlotStatus.OCCUPIED,
                             help=slot.slot_type.value):
                    new_status = (
                        SlotStatus.AVAILABLE if slot.status == SlotStatus.MAINTENANCE else SlotStatus.MAINTENANCE
                    )
                    call_parking_service("update_slot_status", slot.slot_number, new_status.value)
                    st.rerun()

with tab3:
    st.subheader("🏢 Level Overview")
    df_levels = pd.DataFrame([
        {
            "Level": level["label"],
            "Available": level["available"],
            "Occupied": level["occupied"],
            "Maintenance": level["maintenance"],
        }
        for level in status["levels"]
    ])
    if not df_levels.empty:
        st.bar_chart(df_levels.set_index("Level"), color=["#4ECDC4", "#FF6B6B", "#FFC145"])
        st.progress(status["occupancy_rate"] / 100)

    sessions = call_parking_service("get_active_sessions")
    if sessions:
        st.dataframe(pd.DataFrame([
            {
                "Number Plate": s.vehicle_number_plate,
                "Billing": s.billing_type.value,
                "Entry Time": s.entry_time.strftime("%Y-%m-%d %H:%M"),
            }
            for s in sessions
        ]), use_container_width=True)
    else:
        st.info("No vehicles currently parked")

# Poll for changes made by other clients
time.sleep(settings.DASHBOARD_REFRESH_SECONDS)
st.rerun()
