from noisegate.health.tracker import HealthTracker, MethodMetrics, TrackedUpstream

__all__ = ["HealthTracker", "MethodMetrics", "TrackedUpstream"]
