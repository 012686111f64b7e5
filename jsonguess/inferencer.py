import logging

from jsonguess import util
from jsonguess.errors import GuessError
from jsonguess.errors import InvariantError
from jsonguess.merger import merge_shapes
from jsonguess.shapes import ArrayShape
from jsonguess.shapes import Field
from jsonguess.shapes import ObjectShape
from jsonguess.shapes import Primitive
from jsonguess.shapes import is_primitive


class ShapeInferencer(object):
    def __init__(self, store):
        self.store = store

    def infer(self, node):
        """推断根节点，返回解引用后的 shape
        """
        if node.kind == 'primitive':
            raise GuessError('JSON root must be an array or an object')

        root = self.store.resolve(self.infer_node(node))
        util.invariant(not is_primitive(root), 'Root shape cannot be primitive')
        logging.debug('inferred root %s, %d shapes stored', root['kind'], len(self.store))
        return root

    def infer_samples(self, nodes):
        """多个样本按同一数组中的元素合并

        合并结果只有一个对象或数组时直接作为根，否则根为包含所有可能类型的数组。
        """
        if not nodes:
            raise GuessError('At least one sample is required')

        array = self.infer_items(nodes)
        if len(array.types) == 1 and not is_primitive(array.types[0]):
            root = self.store.resolve(array.types[0])
        else:
            root = array
        logging.debug('merged %d samples into root %s', len(nodes), root['kind'])
        return root

    def infer_node(self, node):
        if node.kind == 'primitive':
            return Primitive(node.type)
        elif node.kind == 'array':
            return self.infer_array(node)
        elif node.kind == 'object':
            return self.infer_object(node)
        raise InvariantError('Unknown node kind: %s' % node.kind)

    def infer_object(self, node):
        # 对象统一保存到 store 中，只返回引用
        fields = [Field(key, [self.infer_node(value)]) for key, value in node.children]
        return self.store.save(ObjectShape(fields))

    def infer_array(self, node):
        return self.infer_items(node.children)

    def infer_items(self, nodes):
        shapes = [self.infer_node(node) for node in nodes]
        shapes = util.uniq_by(shapes, util.object_hash)
        resolved = [self.store.resolve(shape) for shape in shapes]
        return ArrayShape(merge_shapes(self.store, resolved))
