# -*- coding: utf-8 -*-

"""根据 JSON / YAML 样本生成类型定义

多个样本文件时合并为一个类型。
"""
import json
import logging
import sys

import click
import jsonguess
import jsonschema
import pyaml
import yaml
from jsonguess import render
from jsonguess.loader import MAX_DEPTH
from jsonguess.loader import depth_ceiling

FORMATS = ('ts', 'json', 'yaml', 'schema')


class SampleLoader(yaml.SafeLoader):
    pass


# 日期、时间按字符串读取，JSON 中没有对应的类型
SampleLoader.add_constructor('tag:yaml.org,2002:timestamp', SampleLoader.construct_yaml_str)


class TypeGen(object):
    def __init__(self, fmt, is_yaml, max_depth, ofile):
        self.fmt = fmt
        self.is_yaml = is_yaml
        self.max_depth = max_depth
        self.ofile = ofile

    def output(self, *args, **kwargs):
        kwargs.update(file=self.ofile or sys.stdout)
        print(*args, **kwargs)

    def load(self, stream, name):
        text = stream.read()
        if self.is_yaml or name.endswith(('.yml', '.yaml')):
            try:
                return yaml.load(text, Loader=SampleLoader)
            except yaml.YAMLError as e:
                raise click.ClickException('YAML 格式错误 %s: %s' % (name, e))
            except RecursionError:
                raise click.ClickException('嵌套层数过多 %s' % name)
        try:
            return json.loads(text)
        except ValueError as e:
            raise click.ClickException('JSON 格式错误 %s: %s' % (name, e))
        except RecursionError:
            raise click.ClickException('嵌套层数过多 %s' % name)

    def read_samples(self, srcfiles):
        if not srcfiles:
            return [self.load(sys.stdin, '<stdin>')]

        samples = []
        for srcfile in srcfiles:
            with open(srcfile, 'r', encoding='utf-8') as stream:
                samples.append(self.load(stream, srcfile))
            logging.debug('loaded sample %s', srcfile)
        return samples

    def process(self, srcfiles):
        samples = self.read_samples(srcfiles)
        try:
            if len(samples) == 1:
                json_types = jsonguess.guess(samples[0], self.max_depth)
            else:
                json_types = jsonguess.guess_samples(samples, self.max_depth)
        except jsonguess.GuessError as e:
            raise click.ClickException(str(e))

        logging.debug('%d types guessed from %d samples', len(json_types), len(samples))
        self.output_types(json_types)

    def output_types(self, json_types):
        if self.fmt == 'ts':
            self.output(render.to_typescript(json_types), end='')
        elif self.fmt == 'json':
            self.output(json.dumps(render.to_data(json_types), ensure_ascii=False, indent=2))
        elif self.fmt == 'yaml':
            self.output(pyaml.dump(render.to_data(json_types)), end='')
        else:
            schema = render.to_json_schema(json_types)
            self.validate(schema)
            self.output(json.dumps(schema, ensure_ascii=False, indent=2))

    # noinspection PyMethodMayBeStatic
    def validate(self, schema):
        try:
            jsonschema.Draft7Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise click.ClickException('生成的 Schema 无效: %s' % e.message)


@click.command()
@click.option('--format', '-f', 'fmt', type=click.Choice(FORMATS), default='ts', help='输出格式.')
@click.option('--yaml', '-y', 'is_yaml', is_flag=True, help='以 YAML 格式读取样本.')
@click.option('--max-depth', '-m', default=MAX_DEPTH, type=click.IntRange(1, depth_ceiling()), help='允许的最大嵌套层数.')
@click.option('--ofile', '-o', type=click.File('w', encoding='utf-8'), help='输出文件.')
@click.option('--debug', '-d', is_flag=True, help='是否输出调试信息.')
@click.option('--version', '-v', is_flag=True, is_eager=True, help='版本信息.')
@click.argument('srcfiles', nargs=-1, type=click.Path(exists=True, dir_okay=False))
def run(fmt, is_yaml, max_depth, ofile, debug, version, srcfiles):
    if version:
        print('jsonguess %s' % jsonguess.__version__)
        return

    log_format = '%(asctime)s - %(levelname)s - %(message)s'
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=log_level, format=log_format)

    typegen = TypeGen(fmt, is_yaml, max_depth, ofile)
    typegen.process(srcfiles)


if __name__ == "__main__":
    run()
