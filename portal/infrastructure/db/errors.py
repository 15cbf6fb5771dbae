"""Errores del ciclo de vida del pool (init doble, uso antes de init_pool)."""


class DatabasePoolError(RuntimeError):
    pass


class PoolAlreadyInitializedError(DatabasePoolError):
    pass


class PoolNotInitializedError(DatabasePoolError):
    pass
