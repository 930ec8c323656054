import threading

from todo_portal.core.security import Clock, utc_now
from todo_portal.db.repositories import TodoRepository, UserRepository


class Database:
    """
    Process memory standing in for a database: the user and todo repositories.

    ``account_lock`` serializes the multi-collection sequences (account
    deletion, todo creation for an owner) so no request sees a user deleted
    while its todos remain, or adds a todo to a user being deleted.
    """

    def __init__(self, clock: Clock = utc_now):
        self.users = UserRepository(clock=clock)
        self.todos = TodoRepository(clock=clock)
        self.account_lock = threading.RLock()


_database = Database()


# ----------------------------------------------------
# DB Dependency
# ----------------------------------------------------
def get_db() -> Database:
    return _database
