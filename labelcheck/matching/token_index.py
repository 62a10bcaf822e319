from labelcheck.models.schemas import IndexedWord, OcrResult


def build_indexed_words(ocr_results: list[OcrResult]) -> list[IndexedWord]:
    """Merge per-image word lists into one sequence with a global index.

    Words keep their input order, image by image. No filtering or
    normalization happens here: global_index N always refers to the
    N-th word the OCR produced across the whole submission.
    """
    located = (
        (image_index, local_index, word)
        for image_index, result in enumerate(ocr_results)
        for local_index, word in enumerate(result.words)
    )
    return [
        IndexedWord(
            global_index=global_index,
            image_index=image_index,
            local_word_index=local_index,
            text=word.text,
            word=word,
        )
        for global_index, (image_index, local_index, word) in enumerate(located)
    ]
