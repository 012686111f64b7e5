import hashlib
import json

from jsonguess.errors import InvariantError


def invariant(condition, message, *args):
    if not condition:
        raise InvariantError(message % args if args else message)


def object_hash(obj):
    # ! 只对 dict 的 key 排序，list 保持原有顺序（字段顺序不同则 hash 不同）
    # ! 必须转义为 ASCII，单独的代理字符无法编码为 utf-8
    text = json.dumps(obj, sort_keys=True)
    return hashlib.md5(text.encode('ascii')).hexdigest()


def uniq(items):
    return uniq_by(items, lambda item: item)


def uniq_by(items, key):
    """去重，保留第一次出现的项
    """
    seen = set()
    result = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        result.append(item)
    return result


def title_case(name):
    return name[:1].upper() + name[1:]
