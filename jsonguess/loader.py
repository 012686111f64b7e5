"""把 Python 中的 JSON 数据转换为节点树

数组、对象保留原有顺序，基本类型只保留种类，不保留值。
"""
import collections.abc
import sys

from jsonguess.errors import DepthLimitError
from jsonguess.errors import LoaderError

# 容器最大嵌套层数
MAX_DEPTH = 100

# 每层嵌套在推断、合并、输出时大约占用的栈帧数
FRAMES_PER_LEVEL = 10


class ArrayNode(object):
    kind = 'array'

    def __init__(self, children):
        self.children = children

    def __repr__(self):
        return 'ArrayNode(%r)' % self.children


class ObjectNode(object):
    kind = 'object'

    def __init__(self, children):
        # [(key, node), ...]
        self.children = children

    def __repr__(self):
        return 'ObjectNode(%r)' % self.children


class PrimitiveNode(object):
    kind = 'primitive'

    def __init__(self, type):
        self.type = type

    def __repr__(self):
        return 'PrimitiveNode(%r)' % self.type


def primitive_type(value):
    # ! bool 是 int 的子类，必须先判断
    if value is None:
        return 'null'
    elif isinstance(value, bool):
        return 'boolean'
    elif isinstance(value, (int, float)):
        return 'number'
    elif isinstance(value, str):
        return 'string'
    return None


def depth_ceiling():
    """max_depth 允许的上限，由解释器的递归深度限制决定
    """
    return sys.getrecursionlimit() // FRAMES_PER_LEVEL


def load_tree(value, max_depth=MAX_DEPTH):
    ceiling = depth_ceiling()
    if not 1 <= max_depth <= ceiling:
        raise DepthLimitError('max_depth must be between 1 and %d, got %d' % (ceiling, max_depth))
    return _load(value, 0, max_depth, set())


def _load(value, depth, max_depth, path):
    type = primitive_type(value)
    if type is not None:
        return PrimitiveNode(type)

    if not isinstance(value, (list, tuple, collections.abc.Mapping)):
        raise LoaderError('Unable to load value of type %s' % value.__class__.__name__)

    if depth >= max_depth:
        raise DepthLimitError('Nesting deeper than %d levels' % max_depth)

    # 只检查当前路径上的容器，同一个容器在不同位置出现不算循环
    if id(value) in path:
        raise LoaderError('Circular reference detected')
    path.add(id(value))

    if isinstance(value, collections.abc.Mapping):
        children = []
        for key, item in value.items():
            if not isinstance(key, str):
                raise LoaderError('Object key must be string: %r' % (key,))
            children.append((key, _load(item, depth + 1, max_depth, path)))
        node = ObjectNode(children)
    else:
        node = ArrayNode([_load(item, depth + 1, max_depth, path) for item in value])

    path.discard(id(value))
    return node
