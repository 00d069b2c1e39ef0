"""
End-to-end bootstrap runs against a fake host
"""
import pytest

from conftest import Answers, FakeProbe, every_command, output_of
from lazyboot.errors import PackageManagerFailure, PackageManagerUnavailable, UnsupportedPlatform
from lazyboot.font import NerdFontInstaller
from lazyboot.orchestrator import (
    EXTRAS,
    PREREQUISITES,
    Bootstrapper,
    State,
    extras_flow,
    prerequisites_flow,
    verify_only,
)
from lazyboot.platform.detector import Platform, PlatformFamily
from lazyboot.platform.installers import installer_for
from lazyboot.report import Outcome, VerificationReporter


UBUNTU = 'ID=ubuntu\nVERSION_ID="24.04"\n'


class CountingDetector:
    """Returns a fixed platform and counts detections"""

    def __init__(self, platform: Platform):
        self.platform = platform
        self.calls = 0

    def detect(self) -> Platform:
        self.calls += 1
        return self.platform


@pytest.fixture
def host(config, runner, printer):
    """Build a bootstrapper over fake collaborators"""
    def _build(detector, present, answers, flow=None, versions=None):
        probe = FakeProbe(present, versions)

        def factory(platform):
            return installer_for(platform, probe=probe, printer=printer, runner=runner)

        bootstrapper = Bootstrapper(
            flow or prerequisites_flow(config),
            detector,
            factory,
            VerificationReporter(probe, printer),
            printer,
            confirm=answers,
            font_installer=NerdFontInstaller(config, probe, printer, runner),
        )
        return bootstrapper, probe
    return _build


def without(*missing):
    return [name for name in every_command() if name not in missing]


class TestConfirmation:
    """Nothing happens before the operator agrees"""

    def test_decline(self, host, runner, printer):
        detector = CountingDetector(Platform(PlatformFamily.DEBIAN, 'ubuntu'))
        bootstrapper, _ = host(detector, [], Answers(False))

        assert bootstrapper.run() == 0
        assert bootstrapper.history == [State.START, State.CONFIRM, State.ABORTED]
        assert detector.calls == 0
        assert runner.calls == []
        assert 'Installation cancelled.' in output_of(printer)

    def test_tool_list_shown_before_prompt(self, host, printer):
        bootstrapper, _ = host(CountingDetector(Platform(PlatformFamily.ARCH, 'arch')), [], Answers(False))
        bootstrapper.run()

        text = output_of(printer)
        assert 'LazyVim Prerequisites Installation' in text
        assert 'Neovim (the editor)' in text
        assert 'lazygit (Git TUI) [optional]' in text


class TestPlatformGate:
    """Unsupported hosts stop before any install"""

    def test_unsupported(self, host, runner):
        detector = CountingDetector(Platform(PlatformFamily.UNKNOWN, 'gentoo'))
        bootstrapper, _ = host(detector, [], Answers(True))

        with pytest.raises(UnsupportedPlatform) as excinfo:
            bootstrapper.run()

        assert 'gentoo' in excinfo.value.message
        assert bootstrapper.history[-1] is State.ABORTED
        assert State.INSTALL not in bootstrapper.history
        assert runner.calls == []

    def test_detected_once(self, host, os_release):
        detector = CountingDetector(os_release(UBUNTU).detect())
        bootstrapper, _ = host(detector, without(), Answers(True, False))

        bootstrapper.run()

        assert detector.calls == 1

    def test_missing_package_manager(self, host, runner):
        detector = CountingDetector(Platform(PlatformFamily.FEDORA, 'fedora'))
        bootstrapper, _ = host(detector, without('dnf'), Answers(True))

        with pytest.raises(PackageManagerUnavailable):
            bootstrapper.run()
        assert runner.calls == []


class TestInstallRun:
    """Full runs through install, report and done"""

    def test_fully_provisioned_host(self, host, runner, printer, config, os_release):
        (config.font_path / config.font_name).mkdir(parents=True)
        bootstrapper, _ = host(os_release(UBUNTU), without(), Answers(True))

        assert bootstrapper.run() == 0
        assert bootstrapper.history == [
            State.START, State.CONFIRM, State.IDENTIFY, State.INSTALL, State.REPORT, State.DONE,
        ]
        assert runner.calls == []
        text = output_of(printer)
        assert 'Hack Nerd Font already installed' in text
        assert 'Installation complete!' in text
        assert ':LazyHealth' in text
        assert f"git clone https://github.com/LazyVim/starter {config.editor_config_path}" in text
        assert f"rm -rf {config.editor_config_path}/.git" in text

    def test_missing_tool_is_installed(self, host, runner, os_release):
        bootstrapper, probe = host(os_release(UBUNTU), without('rg'), Answers(True, False))
        runner.on('apt-get', 'install', effect=lambda: probe.add('rg'))

        assert bootstrapper.run() == 0
        outcomes = {r.tool.name: r.outcome for r in bootstrapper.report.results}
        assert outcomes['ripgrep'] is Outcome.INSTALLED
        assert outcomes['git'] is Outcome.PRESENT
        assert runner.count('apt-get', 'update') == 1

    def test_install_that_leaves_tool_missing(self, host, os_release):
        bootstrapper, _ = host(os_release(UBUNTU), without('rg'), Answers(True, False))

        assert bootstrapper.run() == 1
        assert bootstrapper.history[-1] is State.DONE

    def test_required_failure_aborts_without_report(self, host, runner, printer, os_release):
        runner.fail('apt-get', 'install')
        bootstrapper, _ = host(os_release(UBUNTU), without('rg', 'fzf'), Answers(True))

        with pytest.raises(PackageManagerFailure):
            bootstrapper.run()

        assert bootstrapper.report is None
        assert State.REPORT not in bootstrapper.history
        assert bootstrapper.history[-1] is State.ABORTED
        assert not runner.ran('fzf')

    def test_optional_failure_still_succeeds(self, host, runner, printer):
        detector = CountingDetector(Platform(PlatformFamily.FEDORA, 'fedora', '40'))
        runner.fail('atim/lazygit')
        bootstrapper, _ = host(detector, without('lazygit'), Answers(True, False))

        assert bootstrapper.run() == 0
        outcomes = {r.tool.name: r.outcome for r in bootstrapper.report.results}
        assert outcomes['lazygit'] is Outcome.MISSING_OPTIONAL
        assert 'lazygit could not be installed' in output_of(printer)


class TestFontPrompt:
    """The Nerd Font is gated by its own prompt"""

    def test_font_prompt_accepted(self, host, runner, os_release):
        answers = Answers(True, True)
        bootstrapper, _ = host(os_release(UBUNTU), without(), answers)

        bootstrapper.run()

        assert answers.prompts == ['Do you want to continue?', 'Do you want to install Hack Nerd Font?']
        assert runner.ran('unzip', '-o')

    def test_font_prompt_declined(self, host, runner, os_release):
        bootstrapper, _ = host(os_release(UBUNTU), without(), Answers(True, False))

        assert bootstrapper.run() == 0
        assert runner.calls == []

    def test_font_failure_is_a_warning(self, host, runner, printer, os_release):
        runner.fail('curl', '-fLo')
        bootstrapper, _ = host(os_release(UBUNTU), without(), Answers(True, True))

        assert bootstrapper.run() == 0
        assert 'Nerd Font could not be installed' in output_of(printer)

    def test_unwritable_font_directory_is_a_warning(self, host, runner, printer, config, tmp_path, os_release):
        blocker = tmp_path / 'blocker'
        blocker.write_text('')
        config.font_directory = str(blocker / 'fonts')
        bootstrapper, _ = host(os_release(UBUNTU), without(), Answers(True, True))

        assert bootstrapper.run() == 0
        assert bootstrapper.history[-1] is State.DONE
        assert 'Nerd Font could not be installed' in output_of(printer)
        assert not runner.ran('curl', '-fLo')

    def test_extras_flow_has_no_font_prompt(self, host, config, printer):
        answers = Answers(True, True)
        detector = CountingDetector(Platform(PlatformFamily.MACOS, 'macos', '14.5'))
        bootstrapper, _ = host(detector, without(), answers, flow=extras_flow(config))

        assert bootstrapper.run() == 0
        assert answers.prompts == ['Do you want to continue?']
        text = output_of(printer)
        assert ':checkhealth' in text
        assert 'WezTerm' in text
        assert 'Launch WezTerm from Applications' in text


class TestFlows:
    """Flow definitions"""

    def test_default_flows(self):
        assert PREREQUISITES.offers_font
        assert not EXTRAS.offers_font
        assert [tool.name for tool in EXTRAS.tools] == [
            'wezterm', 'imagemagick', 'ghostscript', 'tectonic', 'mermaid-cli',
        ]

    def test_skipped_font_not_offered(self, config):
        config.skip_tools = ['nerd-font']
        assert not prerequisites_flow(config).offers_font

    def test_verify_only_runs_nothing(self, runner, printer):
        probe = FakeProbe(['git'])
        report = verify_only(EXTRAS.tools, VerificationReporter(probe, printer))
        assert report.exit_code == 0
        assert runner.calls == []
