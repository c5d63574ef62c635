from .user import (
    get_user,
    get_user_by_username,
    get_user_by_email,
    account_exists,
    create_user,
    delete_user,
)

from .task import (
    get_task,
    get_tasks,
    create_task,
    update_task,
    delete_task,
    get_task_stats,
)
