"""Hangul jamo model tests."""

from typeworks.services.jamo import (
    JamoCache,
    decompose,
    first_input_key,
    is_jamo_prefix,
    is_syllable,
)


class TestDecompose:
    def test_open_syllable(self):
        assert decompose("가") == ("ㄱ", "ㅏ")

    def test_closed_syllable(self):
        assert decompose("각") == ("ㄱ", "ㅏ", "ㄱ")

    def test_compound_medial_is_expanded(self):
        assert decompose("과") == ("ㄱ", "ㅗ", "ㅏ")
        assert decompose("의") == ("ㅇ", "ㅡ", "ㅣ")

    def test_compound_final_is_expanded(self):
        assert decompose("닭") == ("ㄷ", "ㅏ", "ㄹ", "ㄱ")
        assert decompose("값") == ("ㄱ", "ㅏ", "ㅂ", "ㅅ")

    def test_compound_medial_and_final(self):
        # ㄲ + ㅞ + ㄼ
        syllable = chr(0xAC00 + 1 * 588 + 15 * 28 + 11)
        assert decompose(syllable) == ("ㄲ", "ㅜ", "ㅔ", "ㄹ", "ㅂ")

    def test_range_edges(self):
        assert decompose("가") == ("ㄱ", "ㅏ")
        assert decompose("힣") == ("ㅎ", "ㅣ", "ㅎ")

    def test_lone_compound_jamo(self):
        assert decompose("ㅘ") == ("ㅗ", "ㅏ")
        assert decompose("ㄳ") == ("ㄱ", "ㅅ")

    def test_other_characters_pass_through(self):
        assert decompose("ㄱ") == ("ㄱ",)
        assert decompose("a") == ("a",)
        assert decompose(".") == (".",)

    def test_empty(self):
        assert decompose("") == ()

    def test_is_syllable(self):
        assert is_syllable("한")
        assert not is_syllable("ㅎ")
        assert not is_syllable("h")
        assert not is_syllable("")


class TestJamoCache:
    def test_memoizes_per_character(self):
        cache = JamoCache()
        first = cache.decompose("닭")
        assert cache.decompose("닭") is first
        assert len(cache) == 1

    def test_matches_plain_decompose(self):
        cache = JamoCache()
        for ch in "안녕하세요, world":
            assert cache.decompose(ch) == decompose(ch)

    def test_instances_are_independent(self):
        a, b = JamoCache(), JamoCache()
        a.decompose("가")
        assert len(a) == 1
        assert len(b) == 0

    def test_clear(self):
        cache = JamoCache()
        cache.decompose("가")
        cache.clear()
        assert len(cache) == 0


class TestFirstInputKey:
    def test_hangul_syllable(self):
        assert first_input_key("가") == "r"
        assert first_input_key("한") == "g"

    def test_double_consonant_uses_shift_key(self):
        assert first_input_key("까") == "R"

    def test_lone_vowel(self):
        assert first_input_key("ㅏ") == "k"

    def test_unmapped_character_is_itself(self):
        assert first_input_key("a") == "a"
        assert first_input_key("!") == "!"


class TestIsJamoPrefix:
    def test_partial_syllable(self):
        assert is_jamo_prefix("ㄱ", "각")
        assert is_jamo_prefix("가", "각")

    def test_identical(self):
        assert is_jamo_prefix("각", "각")

    def test_wrong_vowel(self):
        assert not is_jamo_prefix("거", "각")

    def test_overflow_into_next_syllable(self):
        # 가 + ㄴ typed quickly shows as 간 before the vowel of 나 arrives
        assert is_jamo_prefix("간", "가", "나")

    def test_overflow_not_matching_next(self):
        assert not is_jamo_prefix("갇", "가", "나")

    def test_overflow_without_next(self):
        assert not is_jamo_prefix("간", "가", None)

    def test_empty_sides(self):
        assert is_jamo_prefix("", "가")
        assert is_jamo_prefix("가", "")
