import json
import threading

import pytest

import jsonguess
from jsonguess.render import to_typescript


def ts(*lines):
    return '\n'.join(lines) + '\n'


def test_object_with_array_with_objects_in_array():
    json_types = jsonguess.guess({
        'things': [
            {'name': 'polly'},
            {'name': 'polly', 'boop': {'kind': 'red'}},
            {'name': 'polly', 'boop': {'subkind': 'green'}},
        ],
    })
    assert to_typescript(json_types) == ts(
        'type Boop = {',
        '  kind?: string;',
        '  subkind?: string;',
        '};',
        '',
        'type Things = {',
        '  name: string;',
        '  boop?: Boop;',
        '};',
        '',
        'type Root = {',
        '  things: Array<Things>;',
        '};',
    )


def test_array_with_natives():
    assert to_typescript(jsonguess.guess(['test', 32, False])) == ts(
        'type Root = Array<string | number | boolean>;',
    )


def test_object_with_primitives():
    assert to_typescript(jsonguess.guess({'name': 'test', 'age': 32, 'rad': True})) == ts(
        'type Root = {',
        '  name: string;',
        '  age: number;',
        '  rad: boolean;',
        '};',
    )


def test_array_with_object_variants():
    assert to_typescript(jsonguess.guess([{'name': 'test', 'rad': True}, {'age': 32}])) == ts(
        'type Guessed = {',
        '  name?: string;',
        '  rad?: boolean;',
        '  age?: number;',
        '};',
        '',
        'type Root = Array<Guessed>;',
    )


def test_nullable_by_presence():
    assert to_typescript(jsonguess.guess([{'name': 'test', 'rad': True}, {'name': 'foo', 'age': 32}])) == ts(
        'type Guessed = {',
        '  name: string;',
        '  rad?: boolean;',
        '  age?: number;',
        '};',
        '',
        'type Root = Array<Guessed>;',
    )


def test_null_value_does_not_make_field_optional():
    json_types = jsonguess.guess([{'name': None}, {'name': 'foo'}])
    assert to_typescript(json_types) == ts(
        'type Guessed = {',
        '  name: null | string;',
        '};',
        '',
        'type Root = Array<Guessed>;',
    )


@pytest.mark.parametrize('value, expected', [
    ([[1, 2, 4]], 'type Root = Array<Array<number>>;'),
    ([[1, 'lollerskates', 4]], 'type Root = Array<Array<number | string>>;'),
    ([[[[1, 'lollerskates', 4]]]], 'type Root = Array<Array<Array<Array<number | string>>>>;'),
    ([[1, 2, 4], [5, 6, 7]], 'type Root = Array<Array<number>>;'),
    ([[1, 2, 4], ['foo', True]], 'type Root = Array<Array<number | string | boolean>>;'),
    ([1, '3', None], 'type Root = Array<number | string | null>;'),
    ([None, '3', 1, '4', None], 'type Root = Array<null | string | number>;'),
])
def test_arrays(value, expected):
    assert to_typescript(jsonguess.guess(value)) == ts(expected)


def test_null_in_object_arrays():
    assert to_typescript(jsonguess.guess([{'name': 'boop'}, None, {'name': 'foo'}])) == ts(
        'type Guessed = {',
        '  name: string;',
        '};',
        '',
        'type Root = Array<Guessed | null>;',
    )


def test_mixed_arrays():
    assert to_typescript(jsonguess.guess([{'name': 'boop'}, 'foo', None, [1, 2, 3]])) == ts(
        'type Guessed = {',
        '  name: string;',
        '};',
        '',
        'type Root = Array<Guessed | Array<number> | string | null>;',
    )


def test_naming_with_counts():
    json_types = jsonguess.guess({
        'nameMe': {'name': 'test'},
        'boop': {'nameMe': {'age': 32}},
    })
    assert to_typescript(json_types) == ts(
        'type NameMe1 = {',
        '  name: string;',
        '};',
        '',
        'type NameMe2 = {',
        '  age: number;',
        '};',
        '',
        'type Boop = {',
        '  nameMe: NameMe2;',
        '};',
        '',
        'type Root = {',
        '  nameMe: NameMe1;',
        '  boop: Boop;',
        '};',
    )


def test_hal_json_shares_types():
    json_types = jsonguess.guess({
        '_links': {
            'self': {'href': 'http://example.com/api/book/hal-cookbook'},
            'next': {'href': 'http://example.com/api/book/hal-case-study'},
            'prev': {'href': 'http://example.com/api/book/json-and-beyond'},
            'first': {'href': 'http://example.com/api/book/catalog'},
            'last': {'href': 'http://example.com/api/book/upcoming-books'},
        },
        '_embedded': {
            'author': {
                '_links': {
                    'self': {'href': 'http://example.com/api/author/shahadat'},
                },
                'id': 'shahadat',
                'name': 'Shahadat Hossain Khan',
                'homepage': 'http://author-example.com',
            },
        },
        'id': 'hal-cookbook',
        'name': 'HAL Cookbook',
    })
    assert to_typescript(json_types) == ts(
        'type Self = {',
        '  href: string;',
        '};',
        '',
        'type _links1 = {',
        '  self: Self;',
        '  next: Self;',
        '  prev: Self;',
        '  first: Self;',
        '  last: Self;',
        '};',
        '',
        'type _links2 = {',
        '  self: Self;',
        '};',
        '',
        'type Author = {',
        '  _links: _links2;',
        '  id: string;',
        '  name: string;',
        '  homepage: string;',
        '};',
        '',
        'type _embedded = {',
        '  author: Author;',
        '};',
        '',
        'type Root = {',
        '  _links: _links1;',
        '  _embedded: _embedded;',
        '  id: string;',
        '  name: string;',
        '};',
    )


def test_inlines_arrays():
    assert to_typescript(jsonguess.guess({'things': [1, 2, 3]})) == ts(
        'type Root = {',
        '  things: Array<number>;',
        '};',
    )


def test_name_for_object_array_child():
    assert to_typescript(jsonguess.guess({'things': [{'count': 1}, {'count': 2}]})) == ts(
        'type Things = {',
        '  count: number;',
        '};',
        '',
        'type Root = {',
        '  things: Array<Things>;',
        '};',
    )


def test_combines_equal_types():
    json_types = jsonguess.guess({
        'image': {'href': 'https://example.com/image'},
        'episodes': [{'image': {'href': 'https://example.com/image'}}],
    })
    assert to_typescript(json_types) == ts(
        'type Image = {',
        '  href: string;',
        '};',
        '',
        'type Episodes = {',
        '  image: Image;',
        '};',
        '',
        'type Root = {',
        '  image: Image;',
        '  episodes: Array<Episodes>;',
        '};',
    )


def test_empty_object():
    assert jsonguess.guess({}) == [
        {'name': 'Root', 'isRoot': True, 'body': {'kind': 'object', 'fields': []}},
    ]


def test_empty_array():
    assert jsonguess.guess([]) == [
        {
            'name': 'Root',
            'isRoot': True,
            'body': {'kind': 'array', 'elementType': {'kind': 'primitive', 'type': 'never'}},
        },
    ]


def test_empty_array_in_object():
    assert jsonguess.guess({'things': []}) == [
        {
            'name': 'Root',
            'isRoot': True,
            'body': {
                'kind': 'object',
                'fields': [
                    {
                        'name': 'things',
                        'nullable': False,
                        'type': {'kind': 'array', 'elementType': {'kind': 'primitive', 'type': 'never'}},
                    },
                ],
            },
        },
    ]


@pytest.mark.parametrize('value', [[1], [1, 2, 3]])
def test_single_type_is_not_a_union(value):
    assert jsonguess.guess(value) == [
        {
            'name': 'Root',
            'isRoot': True,
            'body': {'kind': 'array', 'elementType': {'kind': 'primitive', 'type': 'number'}},
        },
    ]


def test_union_in_object():
    assert jsonguess.guess({'things': [1, 'test', True, {'name': 'test'}]}) == [
        {
            'name': 'Things',
            'isRoot': False,
            'body': {
                'kind': 'object',
                'fields': [
                    {'name': 'name', 'nullable': False, 'type': {'kind': 'primitive', 'type': 'string'}},
                ],
            },
        },
        {
            'name': 'Root',
            'isRoot': True,
            'body': {
                'kind': 'object',
                'fields': [
                    {
                        'name': 'things',
                        'nullable': False,
                        'type': {
                            'kind': 'array',
                            'elementType': {
                                'kind': 'union',
                                'members': [
                                    {'kind': 'named', 'name': 'Things'},
                                    {'kind': 'primitive', 'type': 'number'},
                                    {'kind': 'primitive', 'type': 'string'},
                                    {'kind': 'primitive', 'type': 'boolean'},
                                ],
                            },
                        },
                    },
                ],
            },
        },
    ]


def test_objects_inside_nested_arrays_are_collected():
    assert to_typescript(jsonguess.guess([[{'id': 1}], [{'id': 2}]])) == ts(
        'type Guessed = {',
        '  id: number;',
        '};',
        '',
        'type Root = Array<Array<Guessed>>;',
    )


def test_names_are_unique_and_single_root():
    json_types = jsonguess.guess({
        'a': {'x': 1},
        'b': {'a': {'y': 1}},
        'c': [{'a': {'z': 1}}],
    })
    names = [json_type.name for json_type in json_types]
    assert len(names) == len(set(names))
    assert [json_type.name for json_type in json_types if json_type.is_root] == ['Root']


def test_primitive_root_is_rejected():
    with pytest.raises(jsonguess.GuessError):
        jsonguess.guess('just a string')


def test_guess_samples_merges_objects():
    json_types = jsonguess.guess_samples([
        {'id': 1, 'tags': ['a']},
        {'id': 2, 'owner': {'name': 'bob'}},
    ])
    assert to_typescript(json_types) == ts(
        'type Owner = {',
        '  name: string;',
        '};',
        '',
        'type Root = {',
        '  id: number;',
        '  tags?: Array<string>;',
        '  owner?: Owner;',
        '};',
    )


def test_guess_samples_single_sample_matches_guess():
    value = {'name': 'test', 'things': [{'count': 1}]}
    assert jsonguess.guess_samples([value]) == jsonguess.guess(value)


def test_guess_samples_mixed_roots():
    assert to_typescript(jsonguess.guess_samples([{'id': 1}, 'text'])) == ts(
        'type Guessed = {',
        '  id: number;',
        '};',
        '',
        'type Root = Array<Guessed | string>;',
    )


def test_guess_samples_requires_a_sample():
    with pytest.raises(jsonguess.GuessError):
        jsonguess.guess_samples([])


def test_concurrent_guesses_do_not_share_state():
    values = [{'n%d' % i: {'v': i}} for i in range(8)]
    expected = [jsonguess.guess(value) for value in values]
    results = [None] * len(values)

    def work(i):
        for _ in range(20):
            results[i] = jsonguess.guess(values[i])

    threads = [threading.Thread(target=work, args=(i,)) for i in range(len(values))]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results == expected


def test_suffixes_skip_names_already_taken():
    json_types = jsonguess.guess({
        'nameMe1': {'x': 1},
        'nameMe': {'a': 1},
        'boop': {'nameMe': {'b': 1}},
    })
    assert [json_type.name for json_type in json_types] == ['NameMe1', 'NameMe2', 'NameMe3', 'Boop', 'Root']
    root = json_types[-1].body
    assert [field['type'] for field in root['fields']] == [
        {'kind': 'named', 'name': 'NameMe1'},
        {'kind': 'named', 'name': 'NameMe2'},
        {'kind': 'named', 'name': 'Boop'},
    ]


def test_lone_surrogates():
    value = json.loads('{"\\ud800": {"a": "\\udfff"}, "b": ["\\ud800"]}')
    json_types = jsonguess.guess(value)
    assert [json_type.name for json_type in json_types] == ['\ud800', 'Root']
    assert json_types[0].body['fields'][0]['type'] == {'kind': 'primitive', 'type': 'string'}


def test_max_depth_above_ceiling_is_rejected():
    value = {}
    for _ in range(600):
        value = {'a': value}
    with pytest.raises(jsonguess.DepthLimitError):
        jsonguess.guess(value, max_depth=100000)
    with pytest.raises(jsonguess.DepthLimitError):
        jsonguess.guess_samples([value], max_depth=100000)
