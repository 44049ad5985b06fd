from parking_lot.application.repositories import AbstractParkingSessionRepository
from parking_lot.domain.results import RevenueEntry, RevenueSummary


class AnalyticsService:
    def __init__(self, parking_session_repo: AbstractParkingSessionRepository):
        self.parking_session_repo = parking_session_repo

    async def get_revenue_summary(self) -> RevenueSummary:
        sessions = await self.parking_session_repo.get_completed_sessions()
        entries = [
            RevenueEntry(
                vehicle_number_plate=s.vehicle_number_plate,
                billing_type=s.billing_type,
                entry_time=s.entry_time,
                exit_time=s.exit_time,
                fixed=s.billing_amount.fixed or 0,
                calculated=s.billing_amount.calculated or 0,
            )
            for s in sessions
        ]
        return RevenueSummary(
            total_revenue=sum(e.amount for e in entries),
            sessions=entries,
        )
