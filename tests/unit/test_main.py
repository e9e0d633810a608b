from pathlib import Path
from unittest.mock import MagicMock

import pytest

from outpaint import main as main_module
from outpaint.main import location_dirname, main
from outpaint.processing.landmarks import LANDMARKS
from outpaint.results.models import ProcessingResult
from outpaint.workflow.models import AttemptOutcome, OutcomeStatus

OK = AttemptOutcome(status=OutcomeStatus.OK)


def _result(location: str) -> ProcessingResult:
    return ProcessingResult(
        url="file:///tmp/x.png",
        filename="out.png",
        media_type="image/png",
        size_bytes=3,
        location=location,
    )


@pytest.fixture()
def fake_workflow(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    workflow = MagicMock()
    workflow.__enter__.return_value = workflow
    workflow.payment_amount = 500
    workflow.select_image.return_value = OK
    workflow.process.side_effect = lambda location: AttemptOutcome(
        status=OutcomeStatus.OK, result=_result(location)
    )
    workflow.download.side_effect = lambda target: target / "result.png"
    monkeypatch.setattr(main_module, "build_workflow", MagicMock(return_value=workflow))
    monkeypatch.setattr(main_module, "Settings", MagicMock(return_value=MagicMock(
        log_level="INFO", default_location="Eiffel Tower (Paris, France)"
    )))
    return workflow


class TestLocationDirname:
    def test_slug(self) -> None:
        assert location_dirname("Eiffel Tower (Paris, France)") == "eiffel-tower-paris-france"

    def test_non_ascii_letters_survive(self) -> None:
        assert location_dirname("Puerta de Alcalá (Madrid, Spain)") == "puerta-de-alcalá-madrid-spain"


class TestMain:
    def test_list_locations(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--list-locations"]) == 0
        assert capsys.readouterr().out.splitlines() == list(LANDMARKS)

    def test_image_is_required(self) -> None:
        with pytest.raises(SystemExit):
            main([])

    def test_default_location(self, tmp_path: Path, fake_workflow: MagicMock) -> None:
        assert main([str(tmp_path / "a.png"), "-o", str(tmp_path)]) == 0

        fake_workflow.process.assert_called_once_with("Eiffel Tower (Paris, France)")
        fake_workflow.download.assert_called_once_with(tmp_path)

    def test_awaiting_payment_is_confirmed(
        self, tmp_path: Path, fake_workflow: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        fake_workflow.process.side_effect = None
        fake_workflow.process.return_value = AttemptOutcome(
            status=OutcomeStatus.AWAITING_PAYMENT, client_secret="pi_1_secret_x"
        )
        fake_workflow.confirm_payment.return_value = OK

        assert main([str(tmp_path / "a.png"), "-o", str(tmp_path)]) == 0
        fake_workflow.confirm_payment.assert_called_once_with()
        assert "Payment of 5.00 required" in capsys.readouterr().out

    def test_several_locations_use_subdirectories(
        self, tmp_path: Path, fake_workflow: MagicMock
    ) -> None:
        argv = [
            str(tmp_path / "a.png"),
            "-o", str(tmp_path),
            "-l", "Petra (Jordan)",
            "-l", "Great Wall of China (China)",
        ]

        assert main(argv) == 0
        targets = [c.args[0] for c in fake_workflow.download.call_args_list]
        assert targets == [tmp_path / "petra-jordan", tmp_path / "great-wall-of-china-china"]

    def test_bad_image_exits_nonzero(
        self, tmp_path: Path, fake_workflow: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        fake_workflow.select_image.return_value = AttemptOutcome(
            status=OutcomeStatus.FAILED, error="Error reading file"
        )

        assert main([str(tmp_path / "a.png")]) == 1
        fake_workflow.process.assert_not_called()
        assert "Error: Error reading file" in capsys.readouterr().err

    def test_retryable_failure_hint(
        self, tmp_path: Path, fake_workflow: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        fake_workflow.process.side_effect = None
        fake_workflow.process.return_value = AttemptOutcome(
            status=OutcomeStatus.FAILED,
            error="Processing timed out, please try again",
            retryable=True,
        )

        assert main([str(tmp_path / "a.png")]) == 1
        assert "(retry possible)" in capsys.readouterr().err
        fake_workflow.download.assert_not_called()
