from user_directory.dao.base import AtomicCounter, BaseDAO, ConcurrentMap
from user_directory.dao.user_dao import UserDAO

__all__ = [
    "AtomicCounter",
    "BaseDAO",
    "ConcurrentMap",
    "UserDAO",
]
