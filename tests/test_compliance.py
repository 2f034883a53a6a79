"""Tests for the machine compliance evaluator.

Covers each field check, tier differences, speed test aggregation,
field ordering, malformed input handling and end-to-end verdicts.
"""

from dataclasses import replace

import pytest

from itcompliance.core.errors import RecordPreconditionError
from itcompliance.core.tiers import PolicyTier
from itcompliance.domain.models import (
    FIELD_ORDER,
    ComplianceField,
    MachineCheckRecord,
    ProcessorInfo,
    SpeedTest,
)
from itcompliance.validation.compliance import (
    is_graphics_valid,
    is_internet_speed_valid,
    is_memory_valid,
    is_operating_system_valid,
    is_processor_valid,
    is_storage_valid,
    speed_test_averages,
    validate_entry,
)
from itcompliance.validation.policy import CompliancePolicy

# -- Helpers --


def speed_tests(download=25.0, upload=10.0, ping=30.0, count=3):
    return tuple(SpeedTest(download, upload, ping) for _ in range(count))


def windows_record(**overrides) -> MachineCheckRecord:
    """Compliant standard-tier Windows machine."""
    record = MachineCheckRecord(
        name="Jamie Cruz",
        department="IT",
        computer_type="Windows",
        processor=ProcessorInfo(brand="Intel", series="Core i7", generation="12th Gen"),
        memory="16GB",
        graphics="Intel Iris XE",
        storage="512GB",
        operating_system="Windows 11 Pro",
        speed_tests=speed_tests(),
    )
    return replace(record, **overrides)


def mac_record(**overrides) -> MachineCheckRecord:
    """Compliant premium-tier Mac."""
    record = MachineCheckRecord(
        name="Robin Reyes",
        department="WebDev",
        computer_type="Mac",
        processor=ProcessorInfo(mac_processor="M3 Pro"),
        memory="18GB",
        graphics="Apple M3 Pro integrated",
        storage="1TB",
        operating_system="Sonoma",
        speed_tests=speed_tests(),
    )
    return replace(record, **overrides)


def intel(series: str, generation: str) -> ProcessorInfo:
    return ProcessorInfo(brand="Intel", series=series, generation=generation)


def amd(series: str) -> ProcessorInfo:
    return ProcessorInfo(brand="AMD", series=series)


# -- Processor --


class TestProcessor:
    """Tests for is_processor_valid."""

    @pytest.mark.parametrize("chip", ["M1", "M2 Max", "M3 Max", "M4"])
    def test_mac_apple_silicon_passes(self, chip):
        """Any chip name starting with M is Apple Silicon."""
        record = mac_record(processor=ProcessorInfo(mac_processor=chip))
        assert is_processor_valid(record) is True

    @pytest.mark.parametrize("chip", ["Intel i7", "", "m2"])
    def test_mac_other_chips_fail(self, chip):
        record = mac_record(processor=ProcessorInfo(mac_processor=chip))
        assert is_processor_valid(record) is False

    def test_intel_generation_boundary(self):
        """11th Gen is the oldest accepted Intel generation."""
        assert is_processor_valid(windows_record(processor=intel("Core i5", "10th Gen"))) is False
        assert is_processor_valid(windows_record(processor=intel("Core i5", "11th Gen"))) is True

    @pytest.mark.parametrize("series", ["Core i5", "Core i7", "Core i9"])
    def test_intel_supported_series(self, series):
        assert is_processor_valid(windows_record(processor=intel(series, "13th Gen"))) is True

    @pytest.mark.parametrize("generation", ["8th Gen", "11th Gen", "14th Gen"])
    def test_intel_core_i3_never_passes(self, generation):
        assert is_processor_valid(windows_record(processor=intel("Core i3", generation))) is False

    def test_intel_missing_generation_fails(self):
        assert is_processor_valid(windows_record(processor=intel("Core i7", ""))) is False

    def test_intel_unknown_series_fails(self):
        assert is_processor_valid(windows_record(processor=intel("Core Ultra 7", "14th Gen"))) is False

    @pytest.mark.parametrize("series", ["Ryzen 5", "Ryzen 7", "Ryzen 9"])
    def test_amd_supported_series(self, series):
        assert is_processor_valid(windows_record(processor=amd(series))) is True

    def test_amd_ryzen_3_fails(self):
        assert is_processor_valid(windows_record(processor=amd("Ryzen 3"))) is False

    def test_unknown_brand_fails(self):
        record = windows_record(processor=ProcessorInfo(brand="Qualcomm", series="Snapdragon X"))
        assert is_processor_valid(record) is False

    def test_unknown_computer_type_fails(self):
        assert is_processor_valid(windows_record(computer_type="Linux")) is False

    def test_same_rule_for_both_tiers(self):
        """Processor rules do not depend on department."""
        processor = intel("Core i5", "10th Gen")
        standard = windows_record(department="IT", processor=processor)
        premium = windows_record(department="WebDev", processor=processor)
        assert is_processor_valid(standard) == is_processor_valid(premium) is False


# -- Memory --


class TestMemory:
    """Tests for is_memory_valid."""

    @pytest.mark.parametrize("memory", ["16GB", "32GB", "16 GB", "64gb"])
    def test_enough_memory_passes(self, memory):
        assert is_memory_valid(memory) is True

    @pytest.mark.parametrize("memory", ["8GB", "4GB", "abc", "", None])
    def test_insufficient_or_malformed_fails(self, memory):
        assert is_memory_valid(memory) is False

    def test_fullwidth_digits_fail(self):
        """Only ASCII digits are read, so "\uff11\uff16GB" has no value."""
        result = validate_entry(windows_record(memory="\uff11\uff16GB"))
        assert result.failed_fields == (ComplianceField.MEMORY,)

    def test_oversized_digit_string_passes(self):
        assert is_memory_valid("9" * 5000 + "GB") is True

    def test_custom_minimum(self):
        policy = CompliancePolicy(min_memory_gb=32)
        assert is_memory_valid("16GB", policy) is False
        assert is_memory_valid("32GB", policy) is True


# -- Graphics --


class TestGraphics:
    """Tests for is_graphics_valid."""

    @pytest.mark.parametrize("graphics", ["Intel UHD Graphics", "", "whatever"])
    def test_standard_tier_accepts_anything(self, graphics):
        record = windows_record(graphics=graphics)
        assert is_graphics_valid(record, PolicyTier.STANDARD) is True

    @pytest.mark.parametrize(
        "graphics",
        ["NVIDIA GeForce RTX 3060", "RTX2050", "rtx 2050", "Geforce RTX 4090 Laptop GPU"],
    )
    def test_creative_rtx_2050_or_better_passes(self, graphics):
        record = windows_record(department="Creative", graphics=graphics)
        assert is_graphics_valid(record, PolicyTier.PREMIUM) is True

    @pytest.mark.parametrize(
        "graphics",
        [
            "Intel Iris XE",
            "NVIDIA GeForce GTX 1650",
            "AMD Radeon RX 6600",
            "RTX 1650",
            "NVIDIA RTX",
            "RTX \uff12\uff10\uff15\uff10",
        ],
    )
    def test_creative_without_rtx_2050_fails(self, graphics):
        record = windows_record(department="Creative", graphics=graphics)
        assert is_graphics_valid(record, PolicyTier.PREMIUM) is False

    @pytest.mark.parametrize(
        "graphics",
        ["Intel Iris Xe Graphics", "NVIDIA GeForce GTX 1050", "AMD Radeon Vega 8", "NVIDIA T500"],
    )
    def test_other_premium_accepts_iris_xe_or_dedicated(self, graphics):
        record = windows_record(department="Learning", graphics=graphics)
        assert is_graphics_valid(record, PolicyTier.PREMIUM) is True

    def test_other_premium_rejects_basic_integrated(self):
        record = windows_record(department="Learning", graphics="Intel UHD Graphics 620")
        assert is_graphics_valid(record, PolicyTier.PREMIUM) is False

    def test_mac_integrated_accepted_on_mac_only(self):
        mac = mac_record(graphics="Apple integrated GPU")
        windows = windows_record(department="WebDev", graphics="integrated graphics")
        assert is_graphics_valid(mac, PolicyTier.PREMIUM) is True
        assert is_graphics_valid(windows, PolicyTier.PREMIUM) is False


# -- Storage --


class TestStorage:
    """Tests for is_storage_valid."""

    def test_tier_asymmetry_at_512gb(self):
        """512GB satisfies the standard tier only."""
        assert is_storage_valid("512GB", PolicyTier.STANDARD) is True
        assert is_storage_valid("512GB", PolicyTier.PREMIUM) is False

    @pytest.mark.parametrize("storage", ["1TB", "2TB", "1000GB", "2048GB"])
    def test_premium_passes_at_1tb(self, storage):
        assert is_storage_valid(storage, PolicyTier.PREMIUM) is True

    @pytest.mark.parametrize("storage", ["1TB", "512GB", "1000GB", "4TB"])
    def test_standard_passes(self, storage):
        assert is_storage_valid(storage, PolicyTier.STANDARD) is True

    @pytest.mark.parametrize("storage", ["256GB", "480GB", "0TB", "abc", "", None])
    def test_standard_fails(self, storage):
        assert is_storage_valid(storage, PolicyTier.STANDARD) is False


# -- Internet speed --


class TestInternetSpeed:
    """Tests for is_internet_speed_valid and speed_test_averages."""

    def test_boundary_values_pass(self):
        """Thresholds are inclusive."""
        assert is_internet_speed_valid(speed_tests(20.0, 5.0, 50.0)) is True

    def test_download_just_below_fails(self):
        assert is_internet_speed_valid(speed_tests(19.9, 5.0, 50.0)) is False

    def test_upload_below_fails(self):
        assert is_internet_speed_valid(speed_tests(100.0, 4.5, 10.0)) is False

    def test_ping_above_fails(self):
        assert is_internet_speed_valid(speed_tests(100.0, 50.0, 50.5)) is False

    def test_average_not_individual_tests(self):
        """One slow test is fine when the mean clears the bar."""
        tests = (
            SpeedTest(10.0, 2.0, 80.0),
            SpeedTest(25.0, 6.0, 30.0),
            SpeedTest(25.0, 7.0, 40.0),
        )
        assert is_internet_speed_valid(tests) is True

    def test_fewer_than_three_tests_fail(self):
        assert is_internet_speed_valid(speed_tests(count=2)) is False
        assert is_internet_speed_valid(()) is False

    def test_extra_tests_are_averaged(self):
        tests = speed_tests(count=3) + (SpeedTest(0.0, 0.0, 500.0),)
        assert len(tests) == 4
        assert is_internet_speed_valid(tests) is False
        assert is_internet_speed_valid(speed_tests(count=5)) is True

    def test_averages(self):
        tests = (SpeedTest(10.0, 1.0, 20.0), SpeedTest(20.0, 2.0, 40.0), SpeedTest(30.0, 3.0, 60.0))
        averages = speed_test_averages(tests)
        assert averages.download_mbps == pytest.approx(20.0)
        assert averages.upload_mbps == pytest.approx(2.0)
        assert averages.ping_ms == pytest.approx(40.0)

    def test_averages_empty(self):
        assert speed_test_averages(()) is None


# -- Operating system --


class TestOperatingSystem:
    """Tests for is_operating_system_valid."""

    def test_windows_11_pro_only(self):
        assert is_operating_system_valid(windows_record(operating_system="Windows 11 Pro")) is True

    @pytest.mark.parametrize(
        "os_name", ["Windows 11 Home", "Windows 10 Pro", "windows 11 pro", "Windows 11 Pro "]
    )
    def test_other_windows_fail(self, os_name):
        assert is_operating_system_valid(windows_record(operating_system=os_name)) is False

    @pytest.mark.parametrize("os_name", ["Sonoma", "Sequoia"])
    def test_recent_macos_passes(self, os_name):
        assert is_operating_system_valid(mac_record(operating_system=os_name)) is True

    @pytest.mark.parametrize("os_name", ["Monterey", "Ventura", "Big Sur"])
    def test_older_macos_fails(self, os_name):
        assert is_operating_system_valid(mac_record(operating_system=os_name)) is False

    def test_mac_with_windows_name_fails(self):
        assert is_operating_system_valid(mac_record(operating_system="Windows 11 Pro")) is False


# -- validate_entry --


class TestValidateEntry:
    """Tests for the combined evaluator."""

    def test_compliant_standard_windows(self):
        """IT department, i7 12th Gen, 16GB, Iris XE, 512GB, Windows 11 Pro."""
        result = validate_entry(windows_record())

        assert result.passed is True
        assert result.failed_fields == ()

    def test_creative_without_rtx_fails_graphics_only(self):
        record = windows_record(
            department="Creative",
            processor=amd("Ryzen 9"),
            memory="32GB",
            graphics="Intel Iris XE",
            storage="1TB",
        )
        result = validate_entry(record)

        assert result.passed is False
        assert result.failed_fields == (ComplianceField.GRAPHICS,)
        assert result.to_dict() == {"passed": False, "failedFields": ["Graphics"]}

    def test_compliant_premium_mac(self):
        assert validate_entry(mac_record()).passed is True

    def test_all_fields_fail_in_fixed_order(self):
        record = windows_record(
            department="Creative",
            processor=intel("Core i3", "12th Gen"),
            memory="8GB",
            graphics="Intel UHD",
            storage="256GB",
            operating_system="Windows 10 Pro",
            speed_tests=speed_tests(5.0, 1.0, 120.0),
        )
        result = validate_entry(record)

        assert result.failed_fields == FIELD_ORDER
        assert [f.value for f in result.failed_fields] == [
            "Processor",
            "Memory",
            "Graphics",
            "Storage",
            "Internet Speed",
            "Operating System",
        ]

    def test_order_independent_of_combination(self):
        record = windows_record(operating_system="Windows 10 Home", memory="8GB")
        result = validate_entry(record)
        assert result.failed_fields == (ComplianceField.MEMORY, ComplianceField.OPERATING_SYSTEM)

    def test_storage_asymmetry_end_to_end(self):
        assert validate_entry(windows_record(department="IT")).passed is True
        premium = validate_entry(windows_record(department="WebDev"))
        assert premium.failed_fields == (ComplianceField.STORAGE,)

    def test_unknown_department_uses_standard_tier(self):
        record = windows_record(department="Night Shift", graphics="Intel UHD")
        assert validate_entry(record).passed is True

    def test_department_match_is_case_sensitive(self):
        """Lowercase "creative" is not a known department, so standard rules apply."""
        record = windows_record(department="creative", graphics="Intel UHD")
        assert validate_entry(record).passed is True

    def test_deterministic(self):
        record = windows_record(memory="8GB", storage="abc")
        assert validate_entry(record) == validate_entry(record) == validate_entry(record)

    def test_passed_matches_failed_fields(self):
        for record in (windows_record(), windows_record(memory="4GB"), mac_record(storage="")):
            result = validate_entry(record)
            assert result.passed == (len(result.failed_fields) == 0)

    def test_record_not_mutated(self):
        record = windows_record()
        before = replace(record)
        validate_entry(record)
        assert record == before

    def test_malformed_speed_values_fail_field_only(self):
        tests = (SpeedTest("fast", 10.0, 30.0),) + speed_tests(count=2)
        result = validate_entry(windows_record(speed_tests=tests))
        assert result.failed_fields == (ComplianceField.INTERNET_SPEED,)

    def test_malformed_speed_test_entries_fail_field_only(self):
        result = validate_entry(windows_record(speed_tests=("a", "b", "c")))
        assert result.failed_fields == (ComplianceField.INTERNET_SPEED,)

    def test_non_string_fields_fail_rather_than_raise(self):
        record = windows_record(memory=16, storage=None, operating_system=11)
        result = validate_entry(record)
        assert result.failed_fields == (
            ComplianceField.MEMORY,
            ComplianceField.STORAGE,
            ComplianceField.OPERATING_SYSTEM,
        )

    def test_missing_record_raises(self):
        with pytest.raises(RecordPreconditionError):
            validate_entry(None)

    def test_missing_speed_tests_raises(self):
        with pytest.raises(RecordPreconditionError) as exc_info:
            validate_entry(windows_record(speed_tests=None))
        assert exc_info.value.details == {"name": "Jamie Cruz"}

    def test_custom_policy(self):
        policy = CompliancePolicy(mac_os_allowed=("Sequoia",))
        assert validate_entry(mac_record(), policy).failed_fields == (
            ComplianceField.OPERATING_SYSTEM,
        )
