# fsmstore/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Callable

StateName = str
EventName = str
MachineName = str
AttributeName = str

# Guard callables receive the record followed by the arguments given to fire()
Guard = Callable[..., Any]
TransitionBody = Callable[[], bool]

DEFAULT_MACHINE: MachineName = "default"
