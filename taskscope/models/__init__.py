from .events import TaskEventModel as TaskEventModel
