"""Core logic: enrichment views, scoring and aggregation.

Modules:
- scoring: averages, letter bands, band histograms
- enrichment: student/course/grade views joined through enrollments
- aggregation: dashboard statistics and performance reports
"""
