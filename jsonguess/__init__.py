"""根据 JSON 样本数据推断类型定义
"""
from jsonguess.errors import DepthLimitError
from jsonguess.errors import GuessError
from jsonguess.errors import InvariantError
from jsonguess.errors import LoaderError
from jsonguess.inferencer import ShapeInferencer
from jsonguess.loader import MAX_DEPTH
from jsonguess.loader import load_tree
from jsonguess.serializer import serialize
from jsonguess.store import ShapeStore

__version__ = '0.1.0'


def guess(value, max_depth=MAX_DEPTH):
    # ! 每次调用使用独立的 store，不同线程可以同时调用
    store = ShapeStore()
    root = ShapeInferencer(store).infer(load_tree(value, max_depth))
    return serialize(store, root)


def guess_samples(values, max_depth=MAX_DEPTH):
    store = ShapeStore()
    nodes = [load_tree(value, max_depth) for value in values]
    root = ShapeInferencer(store).infer_samples(nodes)
    return serialize(store, root)
