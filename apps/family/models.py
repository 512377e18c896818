from django.contrib.auth.models import User
from django.db import models

from apps.core.models import TimeStampedModel


class FamilyMember(TimeStampedModel):
    """거래를 귀속시킬 수 있는 가족 구성원 (사용자별)"""

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='family_members', db_index=True)
    name = models.CharField(max_length=100)

    class Meta:
        db_table = 'family_members'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='family_memb_user_id_0c5b1e_idx'),
        ]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        self.name = (self.name or '').strip()
        super().save(*args, **kwargs)
