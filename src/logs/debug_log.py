import logging
import sys
import json
import inspect
import datetime
from pathlib import Path
from functools import wraps
import traceback

from src.core.exceptions import KanbanError

# Логи пишутся рядом с модулем
log_dir = Path(__file__).parent
log_dir.mkdir(exist_ok=True)

# Цвета для консоли
BLUE = '\033[94m'
GREEN = '\033[92m'
YELLOW = '\033[93m'
RED = '\033[91m'
PURPLE = '\033[95m'
CYAN = '\033[96m'
BOLD = '\033[1m'
END = '\033[0m'

MAX_RESULT_LENGTH = 1000


def format_object(obj):
    """Render an arbitrary object for a log line"""
    if isinstance(obj, (list, dict, tuple, set)):
        try:
            return json.dumps(obj, indent=2, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            return str(obj)
    if hasattr(obj, '__table__'):
        # ORM-модель: выводим только колонки, без служебного состояния
        return str({c.name: getattr(obj, c.name, None) for c in obj.__table__.columns})
    return str(obj)


class DebugLogger:
    """Расширенный логгер для дебага: информация о вызывающем коде и цветной вывод"""

    def __init__(self, name="debug", level=logging.DEBUG):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self.logger.propagate = False

        if self.logger.handlers:
            self.logger.handlers.clear()

        formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s'
        )

        file_handler = logging.FileHandler(log_dir / "debug.log", encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(level)

        self.logger.addHandler(file_handler)
        self.logger.addHandler(console_handler)

    def debug(self, message, *args, **kwargs):
        """Дебаг лог с указанием места вызова"""
        frame = inspect.currentframe().f_back
        filename = frame.f_code.co_filename

        # Относительный путь от пакета src
        src_index = filename.find("src")
        if src_index != -1:
            filename = filename[src_index:]

        caller_info = f"{BLUE}[{filename}:{frame.f_lineno} - {frame.f_code.co_name}]{END}"
        self.logger.debug(f"{caller_info} {message}", *args, **kwargs)

    def info(self, message, *args, **kwargs):
        self.logger.info(f"{GREEN}{message}{END}", *args, **kwargs)

    def warning(self, message, *args, **kwargs):
        self.logger.warning(f"{YELLOW}{message}{END}", *args, **kwargs)

    def error(self, message, *args, **kwargs):
        """Лог ошибок, с трейсом если есть активное исключение"""
        trace = traceback.format_exc()
        if trace and trace != 'NoneType: None\n':
            message = f"{message}\n{RED}Traceback:{END}\n{trace}"
        self.logger.error(f"{RED}{message}{END}", *args, **kwargs)

    def start_func(self, func_name, params=None):
        params_str = f" с параметрами: {format_object(params)}" if params else ""
        self.debug(f"{PURPLE}Начало выполнения функции {func_name}{END}{params_str}")

    def end_func(self, func_name, result=None, execution_time=None):
        result_str = ""
        if result is not None:
            formatted = format_object(result)
            result_str = f", результат: {formatted[:MAX_RESULT_LENGTH]}"
            if len(formatted) > MAX_RESULT_LENGTH:
                result_str += "... [обрезано]"

        time_str = f", время выполнения: {execution_time:.4f}с" if execution_time else ""
        self.debug(f"{PURPLE}Окончание выполнения функции {func_name}{END}{result_str}{time_str}")

    def log_exception(self, message="Произошло исключение"):
        exc_type, exc_value, _ = sys.exc_info()
        if exc_type:
            self.error(f"{message}: {exc_type.__name__}: {exc_value}")
        else:
            self.error(message)

    def log_request(self, request, extra_info=None):
        """Логирование входящего HTTP запроса"""
        method = getattr(request, 'method', 'UNKNOWN')
        url = str(getattr(request, 'url', 'UNKNOWN'))
        client = getattr(request, 'client', None)
        client_host = client.host if client else "unknown"

        info = (
            f"{CYAN}HTTP запрос:{END} {method} {url}\n"
            f"{CYAN}Клиент:{END} {client_host}"
        )
        if extra_info:
            info += f"\n{CYAN}Дополнительно:{END} {extra_info}"

        self.debug(info)

    def log_response(self, response, process_time=None):
        """Логирование исходящего HTTP ответа"""
        status_code = getattr(response, 'status_code', 0)
        color = GREEN if 200 <= status_code < 400 else YELLOW if 400 <= status_code < 500 else RED

        info = f"{CYAN}HTTP ответ:{END} {color}Статус {status_code}{END}"
        if process_time is not None:
            info += f"\n{CYAN}Время обработки:{END} {process_time:.3f}с"

        self.debug(info)

    def log_data(self, name, data):
        self.debug(f"{CYAN}{name}:{END}\n{format_object(data)}")


def _collect_arguments(func, args, kwargs):
    func_args = dict(zip(inspect.getfullargspec(func).args, args))
    func_args.update(kwargs)
    # Сессию БД и self не логируем
    for skipped in ('self', 'cls', 'db'):
        func_args.pop(skipped, None)
    return func_args


def log_function(logger=None):
    """Декоратор для логирования вызова функции, её результата и времени выполнения.

    Supports both regular functions and coroutine functions.
    """
    def decorator(func):
        active_logger = logger or debug_logger

        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                active_logger.start_func(func.__name__, _collect_arguments(func, args, kwargs))
                start_time = datetime.datetime.now()
                try:
                    result = await func(*args, **kwargs)
                except KanbanError as e:
                    active_logger.warning(f"{func.__name__}: {e.message}")
                    raise
                except Exception:
                    active_logger.log_exception(f"Ошибка в функции {func.__name__}")
                    raise
                execution_time = (datetime.datetime.now() - start_time).total_seconds()
                active_logger.end_func(func.__name__, result, execution_time)
                return result

            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            active_logger.start_func(func.__name__, _collect_arguments(func, args, kwargs))
            start_time = datetime.datetime.now()
            try:
                result = func(*args, **kwargs)
            except KanbanError as e:
                active_logger.warning(f"{func.__name__}: {e.message}")
                raise
            except Exception:
                active_logger.log_exception(f"Ошибка в функции {func.__name__}")
                raise
            execution_time = (datetime.datetime.now() - start_time).total_seconds()
            active_logger.end_func(func.__name__, result, execution_time)
            return result

        return wrapper

    return decorator


# Глобальный экземпляр логгера для дебага
debug_logger = DebugLogger()
