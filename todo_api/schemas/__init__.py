from .task import ErrorResponse, Task, TaskCompleteResponse, TaskCreate

__all__ = ["ErrorResponse", "Task", "TaskCompleteResponse", "TaskCreate"]
