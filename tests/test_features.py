import pandas as pd
import pytest

from resolutionai.features import LabelVocabulary, build_featurizer, build_pipeline, normalize_text, top_tokens


def test_vocabulary_assigns_keys_in_first_seen_order():
    vocabulary = LabelVocabulary().fit(["FixB", "FixA", "FixB", "FixC", "FixA"])

    assert vocabulary.labels == ["FixB", "FixA", "FixC"]
    assert vocabulary.encode(["FixA", "FixC", "FixB"]).tolist() == [1, 2, 0]
    assert vocabulary.decode([2, 0]) == ["FixC", "FixB"]
    assert len(vocabulary) == 3


def test_vocabulary_reports_unknown_labels_once():
    vocabulary = LabelVocabulary().fit(["FixA", "FixB"])

    assert vocabulary.unknown(["FixA", "FixZ", "FixZ", "FixY"]) == ["FixZ", "FixY"]
    assert "FixA" in vocabulary
    assert "FixZ" not in vocabulary
    with pytest.raises(KeyError):
        vocabulary.encode(["FixZ"])


def test_pipeline_is_unfit_and_configurable():
    spec = build_pipeline(cache=False)

    assert spec.cache is False
    assert spec.label_column == "applied_resolution"
    assert not hasattr(spec.featurizer, "transformers_")


def test_title_features_precede_description_features():
    frame = pd.DataFrame(
        {
            "title": ["alpha beta", "gamma"],
            "description": ["delta epsilon zeta", "eta theta"],
        }
    )
    featurizer = build_featurizer()
    matrix = featurizer.fit_transform(frame)

    title_width = len(featurizer.named_transformers_["TitleFeaturized"].get_feature_names_out())
    description_width = len(featurizer.named_transformers_["DescriptionFeaturized"].get_feature_names_out())
    assert matrix.shape == (2, title_width + description_width)

    only_title = featurizer.transform(pd.DataFrame({"title": ["alpha"], "description": [""]})).toarray()[0]
    assert only_title[:title_width].sum() > 0
    assert only_title[title_width:].sum() == 0


def test_title_and_description_have_separate_vocabularies():
    frame = pd.DataFrame({"title": ["login"], "description": ["crash"]})
    featurizer = build_featurizer()
    featurizer.fit(frame)

    title_words = featurizer.named_transformers_["TitleFeaturized"].transformer_list[0][1].vectorizer_.vocabulary_
    description_words = featurizer.named_transformers_["DescriptionFeaturized"].transformer_list[0][1].vectorizer_.vocabulary_
    assert set(title_words) == {"login"}
    assert set(description_words) == {"crash"}


def test_normalize_and_top_tokens():
    assert normalize_text("  Login\tFAILS \n") == "login fails"
    assert top_tokens("login login fails on the login page", max_items=2) == ["login", "fails"]
    assert top_tokens("") == []


def test_single_character_words_are_tokens():
    frame = pd.DataFrame({"title": ["A", "B"], "description": ["x y", "z"]})
    featurizer = build_featurizer()
    featurizer.fit(frame)

    title_words = featurizer.named_transformers_["TitleFeaturized"].transformer_list[0][1].vectorizer_.vocabulary_
    assert set(title_words) == {"a", "b"}


def test_column_without_text_becomes_a_zero_block():
    frame = pd.DataFrame({"title": ["login", "crash"], "description": ["", ""]})
    featurizer = build_featurizer()

    matrix = featurizer.fit_transform(frame)

    description = featurizer.named_transformers_["DescriptionFeaturized"]
    assert [block.empty_ for _name, block in description.transformer_list] == [True, True]
    assert len(description.get_feature_names_out()) == 2
    later = featurizer.transform(pd.DataFrame({"title": ["login"], "description": ["something new"]}))
    assert later.shape[1] == matrix.shape[1]
    assert later.toarray()[0, -2:].sum() == 0
