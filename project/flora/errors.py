# flora/errors.py

"""
Исключения сервиса заказов.

Ошибки валидации возвращаются как список сообщений, исключения бросаются
только на границе с хранилищем и при разборе входящего запроса.
"""


class OrderError(Exception):
    """Базовое исключение для всех ошибок заказа."""


class OrderValidationError(OrderError):
    """Заказ не прошёл проверку. Содержит полный список сообщений."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class PersistenceError(OrderError):
    """Запись или чтение из хранилища заказов завершились ошибкой."""


class MalformedInputError(OrderError):
    """Тело запроса нельзя разобрать в форму заказа."""


class InvalidStatusTransition(OrderError):
    """Недопустимый переход статуса заказа."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move order from '{current}' to '{target}'")
