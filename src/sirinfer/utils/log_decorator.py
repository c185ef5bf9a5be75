"""A module that defines a decorator for the sirinfer logger."""

import logging
import os
from datetime import datetime
from functools import wraps
from inspect import getframeinfo, stack


def log_decorator(_func=None):
    """Log the arguments, run time and failures of the wrapped callable.

    Can be used as `@log_decorator()`, `@log_decorator` or called directly
    as `log_decorator(func)`.

    Parameters
    ----------
    _func : function, optional
        function to wrap when called without parentheses. Defaults to None.
    """

    def log_decorator_info(func):
        @wraps(func)
        def log_decorator_wrapper(*args, **kwargs):
            logger = logging.getLogger("sirinfer")

            formatted_arguments = ", ".join(
                [repr(a) for a in args]
                + [f"{k}={v!r}" for k, v in kwargs.items()]
            )
            # report the caller's file and the wrapped function's name
            py_file_caller = getframeinfo(stack()[1][0])
            extra_args = {
                "func_name_override": func.__name__,
                "file_name_override": os.path.basename(
                    py_file_caller.filename
                ),
            }

            start_time = datetime.now()
            logger.debug(
                f"Arguments: {formatted_arguments} - Begin function",
                extra=extra_args,
            )
            try:
                value = func(*args, **kwargs)
            except Exception as ex:
                logger.error(f"Exception: {ex}", extra=extra_args)
                raise ex
            logger.info(
                f"Execution Time: {datetime.now() - start_time}",
                extra=extra_args,
            )
            logger.debug(
                f"Returned: {type(value).__name__} - End function",
                extra=extra_args,
            )
            return value

        return log_decorator_wrapper

    if _func is None:
        return log_decorator_info
    else:
        return log_decorator_info(_func)
