# apps/companies/models.py
from django.db import models


class Company(models.Model):
    """Owner of a set of pairs trades"""

    name = models.CharField(max_length=255)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'companies'
        verbose_name = 'Company'
        verbose_name_plural = 'Companies'
        ordering = ['id']

    def __str__(self):
        return self.name
