import transcritor.matcher as m


def test_remove_accents():
    assert m.remove_accents('Consciência') == 'Consciencia'
    assert m.remove_accents('AÇÃO') == 'ACAO'
    assert m.remove_accents('sol') == 'sol'


def test_matches_every_case_and_accent_variant():
    matcher = m.build_matcher('Alma')
    assert matcher.findall('ALMA alma Álma almà') == ['ALMA', 'alma', 'Álma', 'almà']


def test_accented_word_matches_plain_text():
    assert m.build_matcher('coração').findall('CORACAO e Coração') == ['CORACAO', 'Coração']


def test_cedilla_class():
    assert m.build_matcher('ca').search('ÇA')


def test_whole_word_only():
    assert m.build_matcher('sol').search('girassol') is None
    assert m.build_matcher('sol').search('solar') is None
    assert m.build_matcher('sol').search('o sol, a lua')


def test_latin1_letters_are_part_of_the_word():
    assert m.build_matcher('ce').search('café') is None
    assert m.build_matcher('caf').search('café') is None
    assert m.build_matcher('ce').search('cafe ce')


def test_digits_are_part_of_the_word():
    assert m.build_matcher('sol').search('sol2') is None
    assert m.build_matcher('sol').search('2sol') is None


def test_other_characters_match_literally():
    assert m.build_matcher('3-D').search('filme 3-D hoje')
    assert m.build_matcher('a.b').search('axb') is None
    assert m.build_matcher('a.b').search('a.b')


def test_build_matcher_is_memoized():
    assert m.build_matcher('Terra') is m.build_matcher('Terra')


def test_replace_word_replaces_all_occurrences_verbatim():
    assert m.replace_word('sol e SOL e girassol', 'sol', r'\1') == r'\1 e \1 e girassol'


def test_private_use_placeholders_are_part_of_the_word():
    assert m.build_matcher('sol').search('sol') is None
    assert m.build_matcher('sol').search('sol') is None


def test_case_folding_is_ascii_only():
    assert m.build_matcher('sol').search('ſol') is None
    assert m.build_matcher('sol').search('Ksol')
    assert m.build_matcher('sol').findall('SOL Sol sol') == ['SOL', 'Sol', 'sol']
