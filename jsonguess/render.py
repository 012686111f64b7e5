"""把类型定义输出为具体格式
"""
import json
import re
from urllib.parse import quote

from jsonguess.errors import InvariantError

JSON_SCHEMA_DRAFT = 'http://json-schema.org/draft-07/schema#'

IDENTIFIER = re.compile(r'^[A-Za-z_$][\w$]*$')


def to_data(json_types):
    """转换为普通的 dict / list，用于 JSON、YAML 输出
    """
    return json.loads(json.dumps(json_types))


def ts_type(type):
    kind = type['kind']
    if kind == 'named':
        return type['name']
    elif kind == 'primitive':
        return type['type']
    elif kind == 'union':
        return ' | '.join(ts_type(member) for member in type['members'])
    elif kind == 'array':
        return 'Array<%s>' % ts_type(type['elementType'])
    elif kind == 'object':
        return ts_object(type, '')
    raise InvariantError('Unknown type kind: %s' % kind)


def ts_field_name(name):
    if IDENTIFIER.match(name):
        return name
    return json.dumps(name, ensure_ascii=False)


def ts_object(type, indent):
    if not type['fields']:
        return '{}'
    lines = ['{']
    for field in type['fields']:
        lines.append('%s  %s%s: %s;' % (
            indent,
            ts_field_name(field['name']),
            '?' if field['nullable'] else '',
            ts_type(field['type']),
        ))
    lines.append(indent + '}')
    return '\n'.join(lines)


def to_typescript(json_types):
    definitions = []
    for json_type in json_types:
        body = json_type['body']
        if body['kind'] == 'object':
            definitions.append('type %s = %s;\n' % (json_type['name'], ts_object(body, '')))
        else:
            definitions.append('type %s = %s;\n' % (json_type['name'], ts_type(body)))
    return '\n'.join(definitions)


def schema_pointer(name):
    # JSON Pointer 转义后再做 URI 编码
    return quote(name.replace('~', '~0').replace('/', '~1'), safe='~')


def schema_type(type):
    kind = type['kind']
    if kind == 'named':
        return {'$ref': '#/definitions/%s' % schema_pointer(type['name'])}
    elif kind == 'primitive':
        if type['type'] == 'never':
            return {'not': {}}
        return {'type': type['type']}
    elif kind == 'union':
        return {'anyOf': [schema_type(member) for member in type['members']]}
    elif kind == 'array':
        return {'type': 'array', 'items': schema_type(type['elementType'])}
    elif kind == 'object':
        schema = {
            'type': 'object',
            'properties': {field['name']: schema_type(field['type']) for field in type['fields']},
        }
        # 可空字段即可以缺失的字段
        required = [field['name'] for field in type['fields'] if not field['nullable']]
        if required:
            schema.update(required=required)
        return schema
    raise InvariantError('Unknown type kind: %s' % kind)


def to_json_schema(json_types):
    schema = {'$schema': JSON_SCHEMA_DRAFT}
    definitions = {}
    for json_type in json_types:
        if json_type['isRoot']:
            schema.update(schema_type(json_type['body']))
        else:
            definitions[json_type['name']] = schema_type(json_type['body'])
    if definitions:
        schema.update(definitions=definitions)
    return schema
