# apps/checkins/models.py
from django.db import models
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.utils import timezone

SCALE_MIN, SCALE_MAX = 1, 10


class Measure(models.Model):
    """Pytanie zadawane codziennie (skala 1-10 albo tak/nie)."""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    question_text = models.CharField(max_length=255)

    class QuestionType(models.TextChoices):
        SCALE = 'scale', 'Skala 1-10'
        BINARY = 'binary', 'Tak/Nie'

    question_type = models.CharField(max_length=10, choices=QuestionType.choices, default=QuestionType.SCALE)

    baseline_score = models.PositiveSmallIntegerField(
        null=True, blank=True,
        validators=[MinValueValidator(SCALE_MIN), MaxValueValidator(SCALE_MAX)]
    )
    target_score = models.PositiveSmallIntegerField(
        null=True, blank=True,
        validators=[MinValueValidator(SCALE_MIN), MaxValueValidator(SCALE_MAX)]
    )

    is_active = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['sort_order', 'id']

    def __str__(self):
        return self.question_text

    @property
    def is_binary(self):
        return self.question_type == self.QuestionType.BINARY

    def score_range(self):
        return (0, 1) if self.is_binary else (SCALE_MIN, SCALE_MAX)

    def validate_score(self, score):
        low, high = self.score_range()
        if score is None or not (low <= int(score) <= high):
            raise ValidationError(f"Score for '{self.question_text}' must be between {low} and {high}.")


class CheckInResponse(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    measure = models.ForeignKey(Measure, on_delete=models.CASCADE, related_name='responses')
    check_in_date = models.DateField(default=timezone.localdate)
    score = models.SmallIntegerField()
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('user', 'measure', 'check_in_date')  # Jedna odpowiedź na dzień
        ordering = ['-check_in_date']

    def __str__(self):
        return f"{self.check_in_date} {self.measure}: {self.score}"

    def clean(self):
        if self.measure_id:
            self.measure.validate_score(self.score)
