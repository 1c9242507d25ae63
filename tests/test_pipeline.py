from __future__ import annotations

import asyncio

from conftest import DummyGateway, SleepRecorder, make_term, untranslated

from iso24765_translator.core.dataset import (
    load_terms,
    load_translated_terms,
    save_translated_terms,
    write_json_atomic,
)
from iso24765_translator.translation.processor import BatchProcessor, ProcessorConfig
from iso24765_translator.translation.resume import resume
from iso24765_translator.validation import validate, validate_files


def _processor(gateway) -> BatchProcessor:
    return BatchProcessor(gateway, config=ProcessorConfig(retry_delay=0.0), sleep=SleepRecorder())


def _suffix_ja(wrapped: str) -> str:
    return wrapped + "(JA)"


def test_end_to_end_translation_validates_clean(tmp_path, sample_terms):
    source = tmp_path / "terms.json"
    output = tmp_path / "translated.json"
    write_json_atomic([t.to_dict() for t in sample_terms], source)

    terms = load_terms(source)
    asyncio.run(_processor(DummyGateway(translate_fn=_suffix_ja)).run(terms, output_path=output))
    translated = load_translated_terms(output)

    full = translated[0]
    assert full.name_ja == "abstraction(JA)"
    assert full.aliases_ja == ["abstract view(JA)"]
    assert [d.text_ja for d in full.definitions] == [d.text + "(JA)" for d in terms[0].definitions]
    assert full.related_terms_ja == ["encapsulation(JA)", "information hiding(JA)"]
    assert full.example_ja == "a class hierarchy(JA)"
    assert full.note_ja == "Compare with refinement.(JA)"
    bare = translated[1]
    assert bare.aliases_ja is None and bare.related_terms_ja is None
    assert bare.example_ja is None and bare.note_ja is None
    assert translated[2].note_ja == "See also heuristic.(JA)"

    result = validate_files(source, output)

    assert result.is_valid is True
    assert result.errors == []
    assert not any("identical" in w for w in result.warnings)
    assert result.statistics.completion_rate == 100.0


def test_end_to_end_failed_term_falls_back_and_only_warns(sample_terms):
    def fail_acceptance_testing(wrapped: str) -> str:
        if "acceptance testing" in wrapped:
            raise RuntimeError("translation model unavailable")
        return _suffix_ja(wrapped)

    processor = _processor(DummyGateway(translate_fn=fail_acceptance_testing))

    results = asyncio.run(processor.run(sample_terms))

    failed = results[1]
    assert failed.id == "3.2"
    assert failed.name_ja == failed.name
    assert [d.text_ja for d in failed.definitions] == [d.text for d in failed.definitions]
    assert results[0].name_ja == "abstraction(JA)"
    assert processor.statistics().failed_terms == 1

    result = validate(sample_terms, results)

    assert result.is_valid is True
    assert result.errors == []
    assert 'Term 3.2 name_ja identical to original name: "acceptance testing"' in result.warnings


def test_end_to_end_resume_from_checkpoint_file(tmp_path):
    terms = [make_term(f"1.{i}") for i in range(1, 6)]
    checkpoint_file = tmp_path / "translated.backup-2.json"
    output = tmp_path / "translated.json"
    save_translated_terms([untranslated(t) for t in terms[:2]], checkpoint_file)
    gateway = DummyGateway(translate_fn=_suffix_ja)

    results = asyncio.run(
        resume(load_translated_terms(checkpoint_file), terms, _processor(gateway), output_path=output)
    )

    assert [t.id for t in results] == ["1.1", "1.2", "1.3", "1.4", "1.5"]
    assert [t.id for t in load_translated_terms(output)] == ["1.1", "1.2", "1.3", "1.4", "1.5"]
    # name and one definition for each of the three remaining terms
    assert len(gateway.calls) == 6
    assert validate(terms, results).errors == []
