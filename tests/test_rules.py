import json

import pytest

import transcritor.rules as rules
from transcritor.rules import Rule, RuleTableError

from fakes import FakeClient


def test_packaged_table(monkeypatch):
    monkeypatch.delenv('RULES_SOURCE', raising=False)
    assert rules.load_rules() == (
        Rule('Terra', 'Alma'),
        Rule('Alma', 'Consciência'),
        Rule('sol', 'Sol Maior'),
    )


def test_local_file_keeps_order_and_duplicates(tmp_path):
    path = tmp_path / 'regras.json'
    path.write_text(
        json.dumps([['mar', 'oceano'], {'original': 'rio', 'replacement': 'lago'}, ['mar', 'rio']]),
        encoding='utf-8',
    )
    assert rules.load_rules(str(path)) == (
        Rule('mar', 'oceano'),
        Rule('rio', 'lago'),
        Rule('mar', 'rio'),
    )


def test_source_from_environment(monkeypatch, tmp_path):
    path = tmp_path / 'regras.json'
    path.write_text('[["lua", "Lua Cheia"]]', encoding='utf-8')
    monkeypatch.setenv('RULES_SOURCE', str(path))
    assert rules.load_rules() == (Rule('lua', 'Lua Cheia'),)


def test_cloud_storage_source(monkeypatch):
    client = FakeClient()
    client.bucket('cfg').blob('regras/pt.json').data = '[["Terra", "Alma"]]'
    monkeypatch.setattr(rules.storage, 'Client', lambda *a, **k: client)
    assert rules.load_rules('gs://cfg/regras/pt.json') == (Rule('Terra', 'Alma'),)


def test_invalid_cloud_storage_uri():
    with pytest.raises(RuleTableError):
        rules.load_rules('gs://cfg')


@pytest.mark.parametrize(
    'content',
    [
        'not json',
        '{"Terra": "Alma"}',
        '[["Terra"]]',
        '[["Terra", 1]]',
        '[["", "Alma"]]',
        '[{"original": "Terra"}]',
        '["Terra"]',
    ],
)
def test_malformed_tables(tmp_path, content):
    path = tmp_path / 'regras.json'
    path.write_text(content, encoding='utf-8')
    with pytest.raises(RuleTableError):
        rules.load_rules(str(path))
