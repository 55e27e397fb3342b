"""Quality control for law-firm marketing gap reports.

Package structure:
    report_qc/config.py       – paths, API keys, model settings, thresholds
    report_qc/models.py       – findings, severities, QC results
    report_qc/cache.py        – practice-content cache
    report_qc/loaders/        – research JSON and report HTML loading
    report_qc/validation/     – basic checks, email checks, decision policy, reporting
    report_qc/pipeline/       – Claude client, AI analysis, fixes, rendering, iteration loop
"""
