# flora/utils/log.py
# Журнал событий сервиса заказов

import os
import datetime
import enum
import logging
from aiologger import Logger
from aiologger.handlers.files import AsyncFileHandler


class Log:
    def __init__(self, log_dir: str = "log", log_print: str | bool = "0"):
        self.log_dir = log_dir
        os.makedirs(self.log_dir, exist_ok=True)
        self.handlers = {}
        if isinstance(log_print, bool):
            self.log_print = log_print
        else:
            self.log_print = str(log_print).lower() in ("1", "true", "yes")

    def build_log_path(self, now: datetime.datetime) -> str:
        """
        Путь к файлу журнала за день:
        log/2026/10/19.log
        """
        base_dir = os.path.join(self.log_dir, f"{now.year}", f"{now:%m}")
        os.makedirs(base_dir, exist_ok=True)
        return os.path.join(base_dir, f"{now:%d}.log")

    def format_line(self, now: datetime.datetime, target: str, message: str, data: dict | None) -> str:
        line = f"{now:%d.%m.%Y %H:%M:%S} {target}: {message}"
        if data:
            line += f": {self.safe_serialize(data)}"
        return line

    def should_print(self, is_console: bool | None) -> bool:
        return self.log_print if is_console is None else is_console

    async def get_logger(self, target: str, now: datetime.datetime) -> Logger:
        """Асинхронный логгер для target, файл меняется при смене дня."""
        log_path = self.build_log_path(now)
        current = self.handlers.get(target)

        if current is None or current["path"] != log_path:
            if current is not None:
                await current["logger"].shutdown()

            target_logger = Logger(name=f"flora_{target}")
            target_logger.add_handler(AsyncFileHandler(filename=log_path, mode="a", encoding="utf-8"))
            self.handlers[target] = {"path": log_path, "logger": target_logger}

        return self.handlers[target]["logger"]

    # ────────────── Асинхронное ──────────────
    async def log_info(
        self,
        target: str = "",
        message: str = "",
        data: dict | None = None,
        is_console: bool | None = None,
    ):
        now = datetime.datetime.now()
        line = self.format_line(now, target, message, data)

        target_logger = await self.get_logger(target, now)
        await target_logger.info(line)

        if self.should_print(is_console):
            print(line)

    async def log_warning(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool | None = None):
        await self.log_info(target, f"WARNING: {message}", data, is_console)

    async def log_error(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool | None = True):
        await self.log_info(target, f"ERROR: {message}", data, is_console)

    # ────────────── Синхронное (старт до event loop) ──────────────
    def log_info_sync(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool | None = None):
        now = datetime.datetime.now()
        line = self.format_line(now, target, message, data)
        log_path = self.build_log_path(now)

        logger = logging.getLogger(f"flora_sync_{target}")
        logger.setLevel(logging.INFO)
        logger.propagate = False

        stale = [h for h in logger.handlers if getattr(h, "baseFilename", None) != os.path.abspath(log_path)]
        for handler in stale:
            logger.removeHandler(handler)
            handler.close()

        if not logger.handlers:
            handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
            handler.setFormatter(logging.Formatter("%(message)s"))
            logger.addHandler(handler)

        logger.info(line)

        if self.should_print(is_console):
            print(line)

    def log_error_sync(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool | None = None):
        self.log_info_sync(target, f"ERROR: {message}", data, is_console)

    def safe_serialize(self, obj):
        """
        Приводит объект к виду, пригодному для записи в журнал:
        - dict, list, tuple рекурсивно
        - даты в ISO, Enum по значению
        - Pydantic модели через model_dump
        - остальное как строка с типом
        """
        if isinstance(obj, enum.Enum):
            return obj.value
        elif obj is None or isinstance(obj, (str, int, float, bool)):
            return obj
        elif isinstance(obj, (datetime.date, datetime.datetime)):
            return obj.isoformat()
        elif isinstance(obj, dict):
            return {k: self.safe_serialize(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple, set)):
            return [self.safe_serialize(v) for v in obj]
        elif hasattr(obj, "model_dump"):  # Pydantic
            return self.safe_serialize(obj.model_dump())
        else:
            return f"<{type(obj).__name__}>"

    async def shutdown(self):
        for entry in list(self.handlers.values()):
            await entry["logger"].shutdown()
        self.handlers.clear()
