import pytest

from apps.buckets.models import Bucket
from apps.checkins.models import Measure


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username='ala', password='sekret123')


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(username='ola', password='sekret123')


@pytest.fixture
def auth_client(client, user):
    client.force_login(user)
    return client


@pytest.fixture
def bucket(user):
    return Bucket.objects.create(user=user, name='Zdrowie', color='#22aa55')


@pytest.fixture
def scale_measure(user):
    return Measure.objects.create(user=user, question_text='Jak się czujesz?')


@pytest.fixture
def binary_measure(user):
    return Measure.objects.create(
        user=user,
        question_text='Trening?',
        question_type=Measure.QuestionType.BINARY,
    )
