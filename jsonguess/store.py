from jsonguess import util
from jsonguess.shapes import ObjectRef
from jsonguess.shapes import is_array
from jsonguess.shapes import is_object
from jsonguess.shapes import is_ref


class ShapeStore(object):
    """按内容 hash 保存 ObjectShape / ArrayShape

    每次推断单独创建一个，不能在多次推断之间共享。
    """

    def __init__(self):
        self.shapes = {}

    def __len__(self):
        return len(self.shapes)

    def __contains__(self, hash):
        return hash in self.shapes

    # noinspection PyMethodMayBeStatic
    def hash(self, shape):
        return util.object_hash(shape)

    def save(self, shape):
        util.invariant(is_object(shape) or is_array(shape),
                       'Only object or array shapes can be stored, got %s', shape['kind'])
        # 结构相同的 shape hash 也相同，重复保存只是覆盖为相同的值
        hash = self.hash(shape)
        self.shapes[hash] = shape
        return ObjectRef(hash)

    def resolve(self, shape):
        if not is_ref(shape):
            return shape
        resolved = self.shapes.get(shape.target)
        util.invariant(resolved is not None, 'Shape not found in store. ID: %s', shape.target)
        return resolved
