from taskscope.tasks import event_insert  # noqa: F401

__all__ = [
    "event_insert",
]
