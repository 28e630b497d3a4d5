import pytest

from statuspal_notifier.errors import TemplateRenderError
from statuspal_notifier.schemas.alert import AlertStatus, alerts_status
from statuspal_notifier.templating import TemplateRenderer, get_template_data
from tests.conftest import make_alert


class TestAlertsStatus:

    def test_empty_batch_has_no_status(self):
        assert alerts_status([]) is None

    def test_any_firing_alert_wins(self):
        assert alerts_status([make_alert(resolved=True), make_alert()]) == AlertStatus.FIRING

    def test_all_resolved(self):
        assert alerts_status([make_alert(resolved=True)]) == AlertStatus.RESOLVED


class TestTemplateData:

    def test_common_labels_and_annotations(self):
        alerts = [
            make_alert("A", env="prod", team="core"),
            make_alert("B", env="prod", team="edge"),
        ]
        data = get_template_data(alerts, receiver="ops", group_labels={"env": "prod"})
        assert data.common_labels == {"env": "prod"}
        assert data.common_annotations == {}
        assert data.group_labels == {"env": "prod"}
        assert data.status == "firing"

    def test_firing_and_resolved_views(self):
        data = get_template_data([make_alert("A"), make_alert("B", resolved=True)])
        assert [a["labels"]["alertname"] for a in data.alerts.firing] == ["A"]
        assert [a["labels"]["alertname"] for a in data.alerts.resolved] == ["B"]

    def test_fingerprint_ignores_label_order(self):
        a = make_alert("A", env="prod", team="core")
        b = make_alert("A", team="core", env="prod")
        assert a.fingerprint == b.fingerprint
        assert a.fingerprint != make_alert("A", env="dev", team="core").fingerprint


class TestTemplateRenderer:

    def test_renders_loop_and_filters(self):
        data = get_template_data([make_alert("A"), make_alert("B")])
        out = TemplateRenderer().render(
            "{{ alerts | length }} {% for a in alerts %}{{ a.labels.alertname }}{% endfor %}", data
        )
        assert out == "2 AB"

    def test_time_filter(self):
        data = get_template_data([make_alert()])
        out = TemplateRenderer().render("{{ alerts[0].starts_at | time }}", data)
        assert out == "2024-05-01T12:00:00Z"

    def test_empty_template(self):
        assert TemplateRenderer().render("", get_template_data([])) == ""

    def test_undefined_is_error(self):
        with pytest.raises(TemplateRenderError) as excinfo:
            TemplateRenderer().render("{{ nothing }}", get_template_data([]), "title_message")
        assert "title_message" in str(excinfo.value)

    def test_sandbox_blocks_mutation(self):
        data = get_template_data([make_alert()])
        with pytest.raises(TemplateRenderError):
            TemplateRenderer().render("{{ group_labels.clear() }}", data)

    def test_secret_template_scrubbed(self):
        with pytest.raises(TemplateRenderError) as excinfo:
            TemplateRenderer().render("{{ abc", get_template_data([]), "api_key", secret=True)
        assert "{{ abc" not in str(excinfo.value)
