"""把 shape 图转换为带名字的类型定义列表

1. collect_types: 每个对象、数组 shape 生成一个定义，名字暂时使用内容 hash
2. inline_arrays: 去掉只包装数组的定义（根除外），引用处直接替换为 Array<T>
3. guess_names: 根据字段名猜测类型名，重名的加数字后缀
"""
import itertools
import logging
from operator import itemgetter

from jsonguess import util
from jsonguess.errors import InvariantError
from jsonguess.shapes import is_array
from jsonguess.shapes import is_object
from jsonguess.shapes import is_primitive
from jsonguess.shapes import is_ref

ROOT_NAME = 'Root'
DEFAULT_NAME = 'Guessed'

# 数组嵌套数组的定义最多展开的次数，超过时保留具名的数组定义
MAX_INLINE_PASSES = 5


class PrimitiveType(dict):
    def __init__(self, type):
        super().__init__(kind='primitive', type=type)


class NamedType(dict):
    def __init__(self, name):
        super().__init__(kind='named', name=name)


class ObjectField(dict):
    def __init__(self, name, type, nullable=False):
        super().__init__(name=name, type=type, nullable=nullable)


class ObjectType(dict):
    def __init__(self, fields):
        super().__init__(kind='object', fields=list(fields))


class ArrayType(dict):
    def __init__(self, element_type):
        super().__init__(kind='array', elementType=element_type)


class UnionType(dict):
    def __init__(self, members):
        super().__init__(kind='union', members=list(members))


class JsonType(dict):
    def __init__(self, name, body, is_root=False):
        super().__init__(name=name, body=body, isRoot=is_root)

    @property
    def name(self):
        return self['name']

    @property
    def body(self):
        return self['body']

    @property
    def is_root(self):
        return self['isRoot']


def coalesce_types(types):
    if not types:
        return PrimitiveType('never')
    if len(types) == 1:
        return types[0]
    return UnionType(types)


def to_type(shape):
    if is_ref(shape):
        return NamedType(shape.target)
    elif is_primitive(shape):
        return PrimitiveType(shape['type'])
    elif is_array(shape):
        return ArrayType(coalesce_types([to_type(type) for type in shape.types]))
    raise InvariantError('Unexpected shape in type position: %s' % shape['kind'])


def to_field(field):
    return ObjectField(field.name, coalesce_types([to_type(type) for type in field.types]), field['nullable'])


def collect_types(store, shape):
    """子类型排在引用它的类型之前
    """
    node = store.resolve(shape)
    name = util.object_hash(node)

    if is_object(node):
        children = [type for field in node.fields for type in field.types]
        body = ObjectType([to_field(field) for field in node.fields])
    elif is_array(node):
        children = node.types
        body = ArrayType(coalesce_types([to_type(type) for type in node.types]))
    else:
        raise InvariantError('Only object or array shapes have definitions, got %s' % node['kind'])

    nested = [
        json_type
        for child in children if not is_primitive(child)
        for json_type in collect_types(store, child)
    ]
    return util.uniq_by(nested + [JsonType(name, body)], itemgetter('name'))


def replace_named(type, replacements):
    """返回新的类型，其中名字在 replacements 中的 NamedType 被替换
    """
    kind = type['kind']
    if kind == 'named':
        return replacements.get(type['name'], type)
    elif kind == 'primitive':
        return type
    elif kind == 'array':
        return ArrayType(replace_named(type['elementType'], replacements))
    elif kind == 'union':
        return UnionType([replace_named(member, replacements) for member in type['members']])
    elif kind == 'object':
        return ObjectType([
            ObjectField(field['name'], replace_named(field['type'], replacements), field['nullable'])
            for field in type['fields']
        ])
    raise InvariantError('Unknown type kind: %s' % kind)


def rename_named(type, names):
    return replace_named(type, {name: NamedType(new_name) for name, new_name in names.items()})


def inline_arrays(json_types, root_name, max_passes=MAX_INLINE_PASSES):
    wrappers = {
        json_type.name: ArrayType(json_type.body['elementType'])
        for json_type in json_types
        if json_type.name != root_name and json_type.body['kind'] == 'array'
    }

    # 每一轮展开一层，数组嵌套超过 max_passes 层时会残留具名引用
    for _ in range(max_passes):
        json_types = [
            JsonType(json_type.name, replace_named(json_type.body, wrappers), json_type.is_root)
            for json_type in json_types
        ]

    # 只保留仍被引用的数组定义
    by_name = {json_type.name: json_type for json_type in json_types}
    kept = {name for name in by_name if name == root_name or name not in wrappers}
    pending = list(kept)
    while pending:
        for name in referenced_names(by_name[pending.pop()].body):
            if name in by_name and name not in kept:
                kept.add(name)
                pending.append(name)

    return [json_type for json_type in json_types if json_type.name in kept]


def referenced_names(type):
    kind = type['kind']
    if kind == 'object':
        return [name for field in type['fields'] for name in named_leaves(field['type'])]
    return named_leaves(type)


def named_leaves(type):
    kind = type['kind']
    if kind == 'named':
        return [type['name']]
    elif kind == 'primitive':
        return []
    elif kind == 'array':
        return named_leaves(type['elementType'])
    elif kind == 'union':
        return [name for member in type['members'] for name in named_leaves(member)]
    # 对象总是以引用的形式出现在字段中
    raise InvariantError('Unexpected %s type in field position' % kind)


def guess_names(json_types, root_name):
    names = {
        json_type.name: ROOT_NAME if json_type.name == root_name else DEFAULT_NAME
        for json_type in json_types
    }

    # 字段只引用了一个具名类型时，用字段名作为类型名
    for json_type in json_types:
        if json_type.body['kind'] != 'object':
            continue
        for field in json_type.body['fields']:
            leaves = util.uniq(named_leaves(field['type']))
            guessed = util.title_case(field['name'])
            if len(leaves) == 1 and guessed:
                util.invariant(leaves[0] in names, 'Field %s refers to unknown type %s', field['name'], leaves[0])
                names[leaves[0]] = guessed

    # ! sorted 是稳定排序，同名的按收集顺序编号
    final_names = {}
    groups = []
    pairs = sorted(names.items(), key=itemgetter(1))
    for name, group in itertools.groupby(pairs, key=itemgetter(1)):
        group = list(group)
        if len(group) == 1:
            final_names[group[0][0]] = name
        else:
            groups.append((name, group))

    # 编号时跳过已经被占用的名字，例如字段 nameMe1 得到的 NameMe1
    taken = set(final_names.values())
    for name, group in groups:
        n = 0
        for key, _ in group:
            n += 1
            while '%s%d' % (name, n) in taken:
                n += 1
            final_names[key] = '%s%d' % (name, n)
            taken.add(final_names[key])

    return [
        JsonType(final_names[json_type.name], rename_named(json_type.body, final_names), json_type.name == root_name)
        for json_type in json_types
    ]


def serialize(store, root):
    root_name = util.object_hash(root)
    json_types = collect_types(store, root)
    logging.debug('collected %d definitions', len(json_types))

    json_types = inline_arrays(json_types, root_name)
    util.invariant(any(json_type.name == root_name for json_type in json_types), 'Root definition not found')

    json_types = guess_names(json_types, root_name)
    roots = [json_type for json_type in json_types if json_type.is_root]
    util.invariant(len(roots) == 1, 'Expected exactly one root definition, found %d', len(roots))
    logging.debug('serialized %d definitions', len(json_types))
    return json_types
