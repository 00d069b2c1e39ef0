"""
Tests for the Nerd Font installer
"""
import pytest

from conftest import FakeProbe, output_of
from lazyboot.errors import PackageManagerFailure
from lazyboot.font import NerdFontInstaller


class TestNerdFontInstaller:
    """Download, extract and cache refresh"""

    def test_install_sequence(self, config, runner, printer):
        installer = NerdFontInstaller(config, FakeProbe(['fc-cache']), printer, runner)

        target = installer.install()

        fonts = config.font_path
        archive = str(fonts / 'Hack.zip')
        assert target == fonts / 'Hack'
        assert fonts.is_dir()
        assert runner.calls == [
            ['curl', '-fLo', archive, config.font_url],
            ['unzip', '-o', archive, '-d', str(fonts / 'Hack')],
            ['fc-cache', '-f', str(fonts)],
        ]
        assert "Hack Nerd Font Mono" in output_of(printer)

    def test_no_font_cache_tool(self, config, runner, printer):
        NerdFontInstaller(config, FakeProbe([]), printer, runner).install()
        assert not runner.ran('fc-cache')

    def test_stale_archive_removed(self, config, runner, printer):
        config.font_path.mkdir(parents=True)
        stale = config.font_path / 'Hack.zip'
        stale.write_bytes(b'partial download')

        NerdFontInstaller(config, FakeProbe([]), printer, runner).install()

        assert not stale.exists()

    def test_download_failure(self, config, runner, printer):
        runner.fail('curl', '-fLo')
        installer = NerdFontInstaller(config, FakeProbe([]), printer, runner)

        with pytest.raises(PackageManagerFailure):
            installer.install()
        assert not runner.ran('unzip')
