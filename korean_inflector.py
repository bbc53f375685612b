"""
Korean Inflector Module
Conjugates Korean verb stems and chooses particles by final consonant.
"""
from typing import Optional, Tuple

from pattern_core import VerbFeatures


class KoreanInflector:
    """Narrow Korean conjugator covering the tense/aspect forms the schemas use."""

    HANGUL_START = 0xAC00
    HANGUL_END = 0xD7A3
    JUNGSEONG_COUNT = 21
    JONGSEONG_COUNT = 28

    # Vowel (jungseong) indices
    V_A, V_AE, V_EO, V_E, V_YEO = 0, 1, 4, 5, 6
    V_O, V_WA, V_WAE, V_OE = 8, 9, 10, 11
    V_U, V_WO, V_EU, V_I = 13, 14, 18, 20
    BRIGHT_VOWELS = (0, 2, 8, 12)  # ㅏ ㅑ ㅗ ㅛ
    # Final consonant (jongseong) indices
    F_RIEUL, F_SSANG_SIOS = 8, 20

    # Stems whose forms the regular rules would get wrong, per (tense, aspect)
    SPECIAL_CASES = {
        ('past', 'simple'): {
            '걷': '걸었어', '듣': '들었어', '돕': '도왔어', '모르': '몰랐어', '부르': '불렀어',
        },
        ('present', 'perfect'): {
            '걷': '걸었어', '듣': '들었어', '돕': '도왔어', '모르': '몰랐어', '부르': '불렀어',
        },
        ('present', 'simple'): {
            '걷': '걸어요', '듣': '들어요', '돕': '도와요', '모르': '몰라요', '부르': '불러요',
        },
        ('future', 'simple'): {
            '걷': '걸을 거야', '듣': '들을 거야', '돕': '도울 거야',
        },
    }

    # Particle markers written after a slot in Korean surfaces:
    # marker -> (after a final consonant, after a vowel)
    PARTICLE_MARKERS = {
        '을/를': ('을', '를'), '를/을': ('을', '를'),
        '이/가': ('이', '가'), '가/이': ('이', '가'),
        '은/는': ('은', '는'), '는/은': ('은', '는'),
        '과/와': ('과', '와'), '와/과': ('과', '와'),
        '으로/로': ('으로', '로'), '로/으로': ('으로', '로'),
    }

    # ===== Hangul syllable arithmetic =====

    def _is_syllable(self, char: str) -> bool:
        return bool(char) and self.HANGUL_START <= ord(char) <= self.HANGUL_END

    def _decompose(self, char: str) -> Tuple[int, int, int]:
        offset = ord(char) - self.HANGUL_START
        initial = offset // (self.JUNGSEONG_COUNT * self.JONGSEONG_COUNT)
        vowel = (offset // self.JONGSEONG_COUNT) % self.JUNGSEONG_COUNT
        final = offset % self.JONGSEONG_COUNT
        return initial, vowel, final

    def _compose(self, initial: int, vowel: int, final: int = 0) -> str:
        return chr(self.HANGUL_START + (initial * self.JUNGSEONG_COUNT + vowel) * self.JONGSEONG_COUNT + final)

    def has_batchim(self, word: str) -> bool:
        """True when the last syllable of the word ends in a consonant."""
        if not word or not self._is_syllable(word[-1]):
            return False
        return (ord(word[-1]) - self.HANGUL_START) % self.JONGSEONG_COUNT != 0

    def choose_particle(self, word: str, marker: str) -> str:
        """
        Pick the particle variant that fits the word.

        Args:
            word: The word the particle attaches to
            marker: A marker such as '을/를' or '으로/로'

        Returns:
            The particle alone (e.g. '를')
        """
        with_final, without_final = self.PARTICLE_MARKERS[marker]
        if with_final == '으로':
            # ㄹ-final words take 로 like vowel-final ones
            last = word[-1:] if word else ''
            if self.has_batchim(word) and self._decompose(last)[2] != self.F_RIEUL:
                return with_final
            return without_final
        return with_final if self.has_batchim(word) else without_final

    # ===== Stem forms =====

    @staticmethod
    def stem_of(verb: str) -> str:
        """Strip the dictionary ending 다."""
        verb = verb.strip()
        if len(verb) > 1 and verb.endswith('다'):
            return verb[:-1]
        return verb

    def _is_bright(self, stem: str) -> bool:
        """True when the last syllable's vowel takes 아 rather than 어."""
        if not stem or not self._is_syllable(stem[-1]):
            return False
        return self._decompose(stem[-1])[1] in self.BRIGHT_VOWELS

    def infinitive(self, stem: str) -> str:
        """The 아/어 form of a stem (가, 먹어, 마셔, 공부해)."""
        if not stem:
            return stem
        if stem.endswith('하'):
            return stem[:-1] + '해'
        last = stem[-1]
        if not self._is_syllable(last):
            return stem + '어'
        initial, vowel, final = self._decompose(last)
        if final:
            return stem + ('아' if self._is_bright(stem) else '어')
        if vowel in (self.V_A, self.V_AE, self.V_EO, self.V_E, self.V_YEO):
            return stem
        contracted = {
            self.V_O: self.V_WA,
            self.V_U: self.V_WO,
            self.V_I: self.V_YEO,
            self.V_OE: self.V_WAE,
        }
        if vowel in contracted:
            return stem[:-1] + self._compose(initial, contracted[vowel])
        if vowel == self.V_EU:
            target = self.V_A if len(stem) > 1 and self._is_bright(stem[:-1]) else self.V_EO
            return stem[:-1] + self._compose(initial, target)
        return stem + '어'

    def past_stem(self, stem: str) -> str:
        """Stem carrying the past marker 았/었 (갔, 먹었, 공부했)."""
        infinitive = self.infinitive(stem)
        last = infinitive[-1]
        if not self._is_syllable(last):
            return infinitive + '었'
        initial, vowel, final = self._decompose(last)
        if final:
            return infinitive + '었'
        return infinitive[:-1] + self._compose(initial, vowel, self.F_SSANG_SIOS)

    def future_form(self, stem: str) -> str:
        """Prospective form with -(으)ㄹ 거야."""
        last = stem[-1]
        if not self._is_syllable(last):
            return stem + '을 거야'
        initial, vowel, final = self._decompose(last)
        if not final:
            return stem[:-1] + self._compose(initial, vowel, self.F_RIEUL) + ' 거야'
        if final == self.F_RIEUL:
            return stem + ' 거야'
        return stem + '을 거야'

    def inflect(self, verb: str, features: Optional[VerbFeatures] = None) -> str:
        """
        Conjugate a Korean verb in casual or polite speech.

        Args:
            verb: Dictionary form such as '가다' or '공부하다'
            features: Requested verb features

        Returns:
            Conjugated form, or the verb unchanged for unsupported combinations
        """
        if not verb or features is None:
            return verb
        tense = features.tense or 'present'
        aspect = features.aspect or 'simple'
        stem = self.stem_of(verb)
        if not stem:
            return verb

        special = self.SPECIAL_CASES.get((tense, aspect), {})
        if stem in special:
            form = special[stem]
            if (tense, aspect) == ('present', 'simple') and not features.is_third_singular:
                # Casual form drops the polite ending
                return form[:-1] if form.endswith('요') else form
            return form

        if aspect == 'progressive':
            if tense == 'past':
                return stem + '고 있었어'
            if tense == 'present':
                return stem + '고 있어'
            return verb
        if (tense, aspect) in (('past', 'simple'), ('present', 'perfect')):
            return self.past_stem(stem) + '어'
        if (tense, aspect) == ('present', 'simple'):
            if features.is_third_singular:
                return self.infinitive(stem) + '요'
            return self.infinitive(stem)
        if (tense, aspect) == ('future', 'simple'):
            return self.future_form(stem)
        return verb
