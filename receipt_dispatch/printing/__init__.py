from .result import DispatchResult, Success, Failure
from .strategies import (
    make_strategy,
    escape_single_quotes,
    BaseStrategy,
    ShellPipelineStrategy,
    DelegateScriptStrategy,
    DryRunStrategy,
)
from .dispatcher import PrintDispatcher, dispatch
