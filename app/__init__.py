from .orchestrator import MonitorStats, WindMonitor

__all__ = ["MonitorStats", "WindMonitor"]
