"""推断过程中使用的结构描述

全部是 dict 的子类，可以直接 json.dumps，hash 也是基于 json.dumps 计算的。
"""

PRIMITIVE_TYPES = ('string', 'boolean', 'number', 'null')


class Primitive(dict):
    def __init__(self, type):
        super().__init__(kind='primitive', type=type)


class ArrayShape(dict):
    def __init__(self, types):
        super().__init__(kind='array', types=list(types))

    @property
    def types(self):
        return self['types']


class Field(dict):
    def __init__(self, name, types, nullable=False):
        super().__init__(name=name, types=list(types), nullable=nullable)

    @property
    def name(self):
        return self['name']

    @property
    def types(self):
        return self['types']


class ObjectShape(dict):
    """只保存在 ShapeStore 中，其他地方用 ObjectRef 引用
    """

    def __init__(self, fields):
        super().__init__(kind='object', fields=list(fields))

    @property
    def fields(self):
        return self['fields']


class ObjectRef(dict):
    def __init__(self, target):
        super().__init__(kind='ref', target=target)

    @property
    def target(self):
        return self['target']


def is_primitive(shape):
    return shape['kind'] == 'primitive'


def is_array(shape):
    return shape['kind'] == 'array'


def is_object(shape):
    return shape['kind'] == 'object'


def is_ref(shape):
    return shape['kind'] == 'ref'
