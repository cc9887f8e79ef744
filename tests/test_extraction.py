import pytest
import requests

from apps.progress.domain.extraction import (
    ANTHROPIC_URL, TaskExtractor, extract_tasks_fallback, parse_model_reply,
)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=''):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


def reply(text):
    return FakeResponse(payload={'content': [{'type': 'text', 'text': text}]})


def test_fallback_finds_lead_ins():
    text = "Good day. I need to call the plumber. Also todo: renew passport!"
    assert extract_tasks_fallback(text) == ['call the plumber', 'renew passport']


def test_fallback_finds_bullets_and_numbers():
    text = "Plan:\n- buy milk\n* fix bike\n1. write report\n2) email Ann"
    assert extract_tasks_fallback(text) == ['buy milk', 'fix bike', 'write report', 'email Ann']


def test_fallback_dedupes_and_bounds_length():
    text = "need to call mom. need to call mom. must go. " + "should " + "x" * 200
    assert extract_tasks_fallback(text) == ['call mom']


def test_fallback_comma_clauses():
    assert extract_tasks_fallback("groceries, laundry, gym session, ok") == ['groceries', 'laundry', 'gym session']


def test_fallback_single_clause_is_not_a_list():
    assert extract_tasks_fallback("walked the dog, yes") == []


def test_parse_model_reply():
    assert parse_model_reply('Sure! ["A task", "", 3, "A task", "Other"]') == ['A task', 'Other']
    assert parse_model_reply('[]') == []
    assert parse_model_reply('no array here') is None
    assert parse_model_reply('[not json') is None


def test_without_api_key_uses_fallback():
    session = FakeSession()
    extractor = TaskExtractor(api_key=None, model='m', session=session)
    assert extractor.extract("need to water plants") == ['water plants']
    assert session.calls == []


def test_calls_messages_api():
    session = FakeSession(reply('["Book dentist"]'))
    extractor = TaskExtractor(api_key='key', model='claude-test', timeout=5, session=session)

    assert extractor.extract("I should book the dentist") == ['Book dentist']

    url, kwargs = session.calls[0]
    assert url == ANTHROPIC_URL
    assert kwargs['headers']['x-api-key'] == 'key'
    assert kwargs['headers']['anthropic-version'] == '2023-06-01'
    assert kwargs['json']['model'] == 'claude-test'
    assert 'I should book the dentist' in kwargs['json']['messages'][0]['content']
    assert kwargs['timeout'] == 5


@pytest.mark.parametrize('session', [
    FakeSession(FakeResponse(status_code=500, text='boom')),
    FakeSession(reply('I cannot help with that')),
    FakeSession(FakeResponse(payload=None)),
    FakeSession(error=requests.ConnectionError('offline')),
])
def test_falls_back_on_api_problems(session):
    extractor = TaskExtractor(api_key='key', model='m', session=session)
    assert extractor.extract("todo: clean garage") == ['clean garage']


def test_empty_text_is_rejected():
    with pytest.raises(ValueError):
        TaskExtractor(api_key=None, model='m').extract('   ')
    with pytest.raises(ValueError):
        TaskExtractor(api_key=None, model='m').extract(None)
