from django.db import models


class CalendarToken(models.Model):
    account_email = models.CharField(max_length=255, unique=True)
    access_token = models.TextField()
    refresh_token = models.TextField()
    token_expiry = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f'CalendarToken({self.account_email})'


class SavedEvent(models.Model):
    """
    Backup of a calendar event taken right before it was warped.

    A row exists for a remote_id exactly when that event has been warped,
    which is what keeps later runs from warping it again. Rows are written
    once and never updated.
    """
    name = models.CharField(max_length=500)
    remote_id = models.CharField(max_length=255, db_index=True)
    original_start = models.DateTimeField()  # timezone-aware
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'saved_events'
        ordering = ['-created_at']

    def __str__(self):
        return f'SavedEvent({self.remote_id}, {self.name})'
