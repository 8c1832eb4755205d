"""
Tests for pairwise compatibility scoring.
"""
import unittest

from core.boxers.models import ExperienceLevel
from core.config_loader import MatchingRules
from core.matching.compatibility import (
    check_compatibility,
    compatible_levels,
    is_experience_compatible,
    passes_hard_filters,
    score_match,
)
from tests.mocks.boxing_mocks import make_boxer


class TestScoreMatch(unittest.TestCase):

    def setUp(self):
        self.source = make_boxer(name="Source")

    def test_identical_profiles_score_100(self):
        candidate = make_boxer(name="Twin")
        match = score_match(self.source, candidate)

        self.assertEqual(match.score, 100)
        self.assertEqual(match.weight_difference, 0.0)
        self.assertEqual(match.fights_difference, 0)
        self.assertTrue(match.same_city)
        self.assertTrue(match.same_country)
        self.assertTrue(match.compatible_experience)
        self.assertEqual(match.boxer_id, candidate.id)

    def test_london_intermediates_score_78(self):
        # weight 18 + fights 20 + experience 20 + city 20
        source = make_boxer(
            weight_kg=75.0, wins=10, losses=2, draws=1,
            experience_level=ExperienceLevel.INTERMEDIATE, city="London", country="England"
        )
        candidate = make_boxer(
            weight_kg=77.0, wins=9, losses=2, draws=1,
            experience_level=ExperienceLevel.INTERMEDIATE, city="London", country="England"
        )

        match = score_match(source, candidate)

        self.assertEqual(match.score, 78)
        self.assertEqual(match.weight_difference, 2.0)
        self.assertEqual(match.fights_difference, 1)
        self.assertTrue(match.same_city)
        self.assertTrue(passes_hard_filters(match))

    def test_weight_at_tolerance_earns_zero_weight_points(self):
        candidate = make_boxer(weight_kg=75.0)
        match = score_match(self.source, candidate)

        self.assertEqual(match.weight_difference, 5.0)
        self.assertEqual(match.score, 70)
        self.assertTrue(passes_hard_filters(match))

    def test_weight_over_tolerance_fails_hard_filter(self):
        match = score_match(self.source, make_boxer(weight_kg=75.5))
        self.assertEqual(match.score, 70)
        self.assertFalse(passes_hard_filters(match))

    def test_missing_weight_scores_flat_15(self):
        source = make_boxer(weight_kg=None)
        match = score_match(source, make_boxer(weight_kg=91.0))

        self.assertEqual(match.score, 85)
        self.assertEqual(match.weight_difference, 0.0)
        self.assertTrue(passes_hard_filters(match))

    def test_fights_linear_falloff(self):
        # 5 fights vs 6 fights: 30 * (1 - 1/3) = 20
        match = score_match(self.source, make_boxer(wins=4))
        self.assertEqual(match.fights_difference, 1)
        self.assertEqual(match.score, 90)

    def test_fights_over_tolerance_fails_hard_filter(self):
        match = score_match(self.source, make_boxer(wins=7))
        self.assertEqual(match.fights_difference, 4)
        self.assertFalse(passes_hard_filters(match))

    def test_score_rounds_half_up(self):
        # weight 22.5 + fights 30 + experience 20 + city 20 = 92.5
        match = score_match(self.source, make_boxer(weight_kg=71.25))
        self.assertEqual(match.score, 93)

    def test_adjacent_experience_scores_10(self):
        match = score_match(self.source, make_boxer(experience_level=ExperienceLevel.INTERMEDIATE))
        self.assertTrue(match.compatible_experience)
        self.assertEqual(match.score, 90)

    def test_distant_experience_scores_0(self):
        match = score_match(self.source, make_boxer(experience_level=ExperienceLevel.PROFESSIONAL))
        self.assertFalse(match.compatible_experience)
        self.assertEqual(match.score, 80)

    def test_city_match_is_case_and_whitespace_insensitive(self):
        match = score_match(self.source, make_boxer(city="  CARDIFF ", country="wales"))
        self.assertTrue(match.same_city)
        self.assertEqual(match.score, 100)

    def test_same_country_only_scores_10(self):
        match = score_match(self.source, make_boxer(city="Swansea"))
        self.assertFalse(match.same_city)
        self.assertTrue(match.same_country)
        self.assertEqual(match.score, 90)

    def test_no_location_scores_0(self):
        match = score_match(self.source, make_boxer(city=None, country=None))
        self.assertFalse(match.same_city)
        self.assertFalse(match.same_country)
        self.assertEqual(match.score, 80)

    def test_custom_rules(self):
        rules = MatchingRules(max_weight_difference=10.0, max_fights_difference=6)
        match = score_match(self.source, make_boxer(weight_kg=75.0), rules)
        # 30 * (1 - 5/10) = 15
        self.assertEqual(match.score, 85)
        self.assertTrue(passes_hard_filters(match, rules))

    def test_score_is_bounded(self):
        for weight in (None, 40.0, 69.9, 70.0, 200.0):
            for wins in (0, 3, 50):
                match = score_match(self.source, make_boxer(weight_kg=weight, wins=wins, city=None))
                self.assertGreaterEqual(match.score, 0)
                self.assertLessEqual(match.score, 100)


class TestExperienceCompatibility(unittest.TestCase):

    def test_levels_pair_with_themselves_and_neighbours(self):
        self.assertEqual(
            compatible_levels(ExperienceLevel.BEGINNER),
            {ExperienceLevel.BEGINNER, ExperienceLevel.AMATEUR}
        )
        self.assertEqual(
            compatible_levels(ExperienceLevel.INTERMEDIATE),
            {ExperienceLevel.AMATEUR, ExperienceLevel.INTERMEDIATE, ExperienceLevel.ADVANCED}
        )
        self.assertEqual(
            compatible_levels(ExperienceLevel.PROFESSIONAL),
            {ExperienceLevel.ADVANCED, ExperienceLevel.PROFESSIONAL}
        )

    def test_relation_is_symmetric(self):
        for a in ExperienceLevel:
            for b in ExperienceLevel:
                self.assertEqual(is_experience_compatible(a, b), is_experience_compatible(b, a))

    def test_accepts_raw_values(self):
        self.assertTrue(is_experience_compatible("AMATEUR", "BEGINNER"))
        self.assertFalse(is_experience_compatible("BEGINNER", "ADVANCED"))


class TestCheckCompatibility(unittest.TestCase):

    def test_compatible_pair(self):
        self.assertIsNone(check_compatibility(make_boxer(), make_boxer(weight_kg=74.0)))

    def test_weight_reason(self):
        reason = check_compatibility(make_boxer(), make_boxer(weight_kg=76.0))
        self.assertEqual(reason, "Weight difference (6.0kg) exceeds maximum allowed (5kg)")

    def test_fights_reason(self):
        reason = check_compatibility(make_boxer(), make_boxer(wins=10))
        self.assertEqual(reason, "Fight experience difference (7 fights) exceeds maximum allowed (3 fights)")

    def test_missing_weight_is_not_a_reason(self):
        self.assertIsNone(check_compatibility(make_boxer(weight_kg=None), make_boxer(weight_kg=120.0)))

    def test_experience_is_not_a_hard_rule(self):
        target = make_boxer(experience_level=ExperienceLevel.PROFESSIONAL)
        self.assertIsNone(check_compatibility(make_boxer(), target))


if __name__ == "__main__":
    unittest.main()
