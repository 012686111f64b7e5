"""合并同一位置上的多个 shape（同一数组中的元素，或多个对象中的同名字段）
"""
from jsonguess import util
from jsonguess.errors import InvariantError
from jsonguess.shapes import ArrayShape
from jsonguess.shapes import Field
from jsonguess.shapes import ObjectShape
from jsonguess.shapes import is_array
from jsonguess.shapes import is_object
from jsonguess.shapes import is_primitive


def merge_shapes(store, shapes):
    """返回合并后的类型列表，顺序为：对象、数组、基本类型

    传入的 shape 必须已经解引用。
    """
    objects = []
    arrays = []
    primitives = []
    for shape in shapes:
        if is_object(shape):
            objects.append(shape)
        elif is_array(shape):
            arrays.append(shape)
        elif is_primitive(shape):
            primitives.append(shape)
        else:
            raise InvariantError('Cannot merge unresolved shape: %s' % shape['kind'])

    # 每一类只和同类合并，避免 string 和 array 等混在一起
    merged = []
    if objects:
        merged.append(merge_objects(store, objects))
    if arrays:
        merged.append(merge_arrays(arrays))
    merged.extend(merge_primitives(primitives))
    return merged


def merge_primitives(shapes):
    return util.uniq_by(shapes, util.object_hash)


def merge_arrays(shapes):
    # 数组之间合并元素类型，不按位置比较
    types = [type for shape in shapes for type in shape.types]
    return ArrayShape(util.uniq_by(types, util.object_hash))


def merge_objects(store, shapes):
    field_maps = []
    for shape in shapes:
        fields = {}
        for field in shape.fields:
            fields.setdefault(field.name, field)
        field_maps.append(fields)

    all_keys = util.uniq([field.name for shape in shapes for field in shape.fields])
    common_keys = set(field_maps[0])
    for fields in field_maps[1:]:
        common_keys &= set(fields)

    merged_fields = []
    for key in all_keys:
        candidates = [
            store.resolve(type)
            for fields in field_maps if key in fields
            for type in fields[key].types
        ]
        # ! 缺少该字段的对象存在时即认为可空，与值是否为 null 无关
        merged_fields.append(Field(key, merge_shapes(store, candidates), nullable=key not in common_keys))

    return store.save(ObjectShape(merged_fields))
