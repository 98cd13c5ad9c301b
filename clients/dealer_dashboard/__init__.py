from .api import DealerApiClient, DealerApiError
from .store import DashboardState, DashboardStore
from .sync import DashboardSync

__all__ = ["DashboardState", "DashboardStore", "DashboardSync", "DealerApiClient", "DealerApiError"]
