"""
Tests for platform detection
"""
import subprocess

import pytest

from lazyboot.platform.detector import (
    Platform,
    PlatformDetector,
    PlatformFamily,
    detect_platform,
    parse_os_release,
)


UBUNTU = """\
NAME="Ubuntu"
VERSION_ID="24.04"
ID=ubuntu
ID_LIKE=debian
"""


class TestParseOsRelease:
    """os-release parsing"""

    def test_quoted_and_bare_values(self):
        fields = parse_os_release(UBUNTU)
        assert fields['ID'] == 'ubuntu'
        assert fields['VERSION_ID'] == '24.04'
        assert fields['NAME'] == 'Ubuntu'

    def test_comments_and_blank_lines_skipped(self):
        fields = parse_os_release("# comment\n\nID='arch'\nnot a field\n")
        assert fields == {'ID': 'arch'}


class TestLinuxDetection:
    """Distribution ID to family mapping"""

    @pytest.mark.parametrize('distro_id,family', [
        ('ubuntu', PlatformFamily.DEBIAN),
        ('debian', PlatformFamily.DEBIAN),
        ('pop', PlatformFamily.DEBIAN),
        ('linuxmint', PlatformFamily.DEBIAN),
        ('fedora', PlatformFamily.FEDORA),
        ('rhel', PlatformFamily.FEDORA),
        ('centos', PlatformFamily.FEDORA),
        ('arch', PlatformFamily.ARCH),
        ('manjaro', PlatformFamily.ARCH),
        ('endeavouros', PlatformFamily.ARCH),
    ])
    def test_known_distributions(self, os_release, distro_id, family):
        detected = os_release(f'ID="{distro_id}"\nVERSION_ID="1"\n').detect()
        assert detected.family is family
        assert detected.distro_id == distro_id
        assert detected.is_supported

    def test_unknown_distribution_keeps_id(self, os_release):
        detected = os_release('ID=gentoo\n').detect()
        assert detected.family is PlatformFamily.UNKNOWN
        assert detected.distro_id == 'gentoo'
        assert not detected.is_supported

    def test_id_like_is_not_consulted(self, os_release):
        """Derivatives outside the table stay unknown even with ID_LIKE=debian"""
        detected = os_release('ID=kali\nID_LIKE=debian\n').detect()
        assert detected.family is PlatformFamily.UNKNOWN

    def test_missing_os_release(self, tmp_path):
        detector = PlatformDetector(system='Linux', os_release=tmp_path / 'absent')
        detected = detector.detect()
        assert detected == Platform(PlatformFamily.UNKNOWN, '')

    def test_display_name(self, os_release):
        assert os_release(UBUNTU).detect().display_name == 'ubuntu 24.04'


class TestMacDetection:
    """Kernel name Darwin selects macOS before os-release is read"""

    def test_darwin_reads_sw_vers(self, tmp_path):
        calls = []

        def runner(cmd, **kwargs):
            calls.append(cmd)
            return subprocess.CompletedProcess(cmd, 0, stdout='14.5\n', stderr='')

        detector = PlatformDetector(system='Darwin', os_release=tmp_path / 'absent', runner=runner)
        detected = detector.detect()

        assert detected.family is PlatformFamily.MACOS
        assert detected.version == '14.5'
        assert detected.display_name == 'macOS 14.5'
        assert calls == [['sw_vers', '-productVersion']]

    def test_sw_vers_missing(self, tmp_path):
        def runner(cmd, **kwargs):
            raise FileNotFoundError(cmd[0])

        detected = PlatformDetector(system='Darwin', runner=runner).detect()
        assert detected.family is PlatformFamily.MACOS
        assert detected.version == ''
        assert detected.display_name == 'macOS'

    def test_detect_platform_on_this_host(self):
        """Whatever the host is, detection returns a Platform and never raises"""
        assert isinstance(detect_platform(), Platform)
