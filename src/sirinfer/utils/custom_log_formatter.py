import logging


class CustomLogFormatter(logging.Formatter):
    """Log formatter that honours file and function name overrides.

    When a function is wrapped by `log_decorator()` the log record would
    otherwise report the wrapper's name and file. The decorator passes
    `func_name_override` and `file_name_override` through `extra`, and this
    formatter swaps them into the record before formatting.

    For inline logging calls CustomLogFormatter behaves exactly like
    logging.Formatter.

    Parameters
    ----------
    fmt : str, optional
        A format string for the logged output as a whole, by default
        '%(message)s'.
    datefmt : str, optional
        A format string for the date/time portion of the logged output.
    """

    def format(self, record):
        if hasattr(record, "func_name_override"):
            record.funcName = record.func_name_override
        if hasattr(record, "file_name_override"):
            record.filename = record.file_name_override
        return super(CustomLogFormatter, self).format(record)
