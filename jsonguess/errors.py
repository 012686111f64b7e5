class GuessError(Exception):
    pass


class InvariantError(GuessError):
    """推断引擎内部不变量被破坏，属于程序缺陷而不是输入问题
    """


class LoaderError(GuessError, ValueError):
    """输入不能表示为 JSON
    """


class DepthLimitError(LoaderError):
    pass
