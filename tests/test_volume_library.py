"""
Tests for the volume equations, the species coefficient library and the
basal area helper.
"""
import pytest

from forestinv.species import Species
from forestinv.tree import Tree
from forestinv.tree_utils import BASAL_AREA_FACTOR, calculate_tree_basal_area
from forestinv.volume_library import (
    DEFAULT_VOLUME_EQUATION,
    VolumeCalculator,
    VolumeEquation,
    VolumeLibrary,
    calculate_tree_volume,
    get_volume_equation,
    get_volume_library,
)


DBH_BASAL_AREA_CASES = [
    pytest.param(1.0, 0.005454, id="one_inch"),
    pytest.param(12.0, 0.7854, id="twelve_inch"),
    pytest.param(24.0, 3.1416, id="two_foot"),
]


class TestBasalArea:

    def test_factor_matches_forestry_constant(self):
        assert BASAL_AREA_FACTOR == pytest.approx(0.005454, abs=1e-6)

    @pytest.mark.parametrize("dbh,expected", DBH_BASAL_AREA_CASES)
    def test_tree_basal_area(self, dbh, expected):
        assert calculate_tree_basal_area(dbh) == pytest.approx(expected, rel=1e-3)

    def test_zero_dbh_gives_zero(self):
        assert calculate_tree_basal_area(0.0) == 0.0


class TestVolumeCalculator:

    @pytest.fixture(scope="class")
    def calculator(self):
        return VolumeCalculator()

    def test_cubic_feet_combined_variable(self, calculator):
        # 0.002454 * 12^2 * 80
        assert calculator.cubic_feet(12.0, 80.0) == pytest.approx(28.27008)

    def test_board_feet_combined_variable(self, calculator):
        # 0.01159 * 12^2 * 80
        assert calculator.board_feet(12.0, 80.0) == pytest.approx(133.5168)

    @pytest.mark.parametrize("height", [None, 0.0, -5.0])
    def test_missing_height_gives_zero_volume(self, calculator, height):
        assert calculator.cubic_feet(12.0, height) == 0.0
        assert calculator.board_feet(12.0, height) == 0.0

    def test_board_feet_zero_below_merchantable_dbh(self, calculator):
        assert calculator.board_feet(5.9, 40.0) == 0.0
        assert calculator.board_feet(6.0, 40.0) > 0.0
        assert calculator.cubic_feet(5.9, 40.0) > 0.0

    def test_defect_reduces_both_volumes(self, calculator):
        sound = calculator.calculate(14.0, 90.0)
        defective = calculator.calculate(14.0, 90.0, defect_fraction=0.25)
        assert defective.cubic_feet == pytest.approx(sound.cubic_feet * 0.75)
        assert defective.board_feet == pytest.approx(sound.board_feet * 0.75)

    def test_scribner_correction_clamped_at_zero(self):
        eq = VolumeEquation(bdft_coefficient=0.001, bdft_dbh_coefficient=50.0)
        assert VolumeCalculator(eq).board_feet(10.0, 20.0) == 0.0

    def test_scribner_correction_subtracts_linear_term(self):
        eq = VolumeEquation(bdft_dbh_coefficient=4.0)
        expected = 0.01159 * 12.0 ** 2 * 80.0 - 4.0 * 12.0
        assert VolumeCalculator(eq).board_feet(12.0, 80.0) == pytest.approx(expected)

    def test_calculate_flags_missing_height(self, calculator):
        result = calculator.calculate(12.0, None)
        assert result.height_available is False
        assert result.to_dict() == {
            'cubic_feet': 0.0, 'board_feet': 0.0, 'height_available': False
        }


class TestTreeVolume:

    def test_uses_tree_equation(self):
        eq = VolumeEquation(cuft_coefficient=0.003, bdft_coefficient=0.012)
        tree = Tree(1, 1, Species("DF"), dbh=10.0, height=50.0, volume_equation=eq)
        result = calculate_tree_volume(tree)
        assert result.cubic_feet == pytest.approx(0.003 * 100 * 50)
        assert result.board_feet == pytest.approx(0.012 * 100 * 50)
        assert tree.volume_cuft() == pytest.approx(result.cubic_feet)

    def test_missing_height_is_logged(self, caplog):
        tree = Tree(7, 3, Species("DF"), dbh=10.0)
        with caplog.at_level("DEBUG", logger="forestinv"):
            result = calculate_tree_volume(tree)
        assert result.cubic_feet == 0.0
        assert "plot 7 tree 3" in caplog.text


class TestVolumeLibrary:

    @pytest.fixture(scope="class")
    def library(self):
        return VolumeLibrary({
            'default': DEFAULT_VOLUME_EQUATION.to_dict(),
            'species': {
                'DF': {'cuft_coefficient': 0.0026},
                'ra': {'cuft_coefficient': 0.0023, 'bdft_min_dbh': 8.0},
            },
        })

    def test_packaged_table_has_only_default(self):
        library = get_volume_library()
        assert library.default_equation == DEFAULT_VOLUME_EQUATION
        assert library.species_codes() == []
        assert get_volume_equation("DF") == DEFAULT_VOLUME_EQUATION

    def test_species_lookup_is_case_insensitive(self, library):
        assert library.get_equation("df") == library.get_equation("DF")
        assert library.get_equation(" Ra ").cuft_coefficient == pytest.approx(0.0023)
        assert library.species_codes() == ["DF", "RA"]

    def test_unknown_species_uses_default(self, library):
        assert not library.has_species("ZZ")
        assert library.get_equation("ZZ") == library.default_equation

    def test_species_inherit_unset_coefficients(self, library):
        df = library.get_equation("DF")
        assert df.bdft_coefficient == DEFAULT_VOLUME_EQUATION.bdft_coefficient
        assert df.bdft_min_dbh == 6.0
        assert library.get_equation("RA").bdft_min_dbh == 8.0

    def test_custom_table(self):
        library = VolumeLibrary({
            'default': {'cuft_coefficient': 0.002},
            'species': {'xx': {'bdft_coefficient': 0.02}},
        })
        eq = library.get_equation("XX")
        assert eq.cuft_coefficient == 0.002
        assert eq.bdft_coefficient == 0.02
        assert library.species_codes() == ["XX"]

    def test_equation_dict_round_trip(self):
        eq = VolumeEquation(cuft_coefficient=0.0025, bdft_min_dbh=8.0)
        assert VolumeEquation.from_dict(eq.to_dict()) == eq
