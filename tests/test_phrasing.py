"""Verbose client-label pre-fix applied to regenerated reports."""
from report_qc.validation.phrasing import prefix_verbose_phrasing


def test_specific_labels_are_shortened():
    html = "<p>A person going through a divorce needs a fast answer.</p><p>People going through divorce compare firms.</p>"

    fixed, count = prefix_verbose_phrasing(html)

    assert count == 2
    assert "A divorcing client needs" in fixed
    assert "divorcing clients compare" in fixed


def test_catch_all_runs_after_specific_rules():
    fixed, count = prefix_verbose_phrasing("Call an individual injured in an accident, or an individual.")

    assert count == 2
    assert fixed == "Call an accident victim, or a potential client."


def test_clean_html_is_unchanged():
    html = "<p>Divorcing clients call at night.</p>"

    assert prefix_verbose_phrasing(html) == (html, 0)
