"""Fixed prompts for OCR correction and translation."""

CORRECTION_TEMPERATURE = 0.1
CORRECTION_MAX_TOKENS = 4000

TRANSLATION_TEMPERATURE = 0.3
TRANSLATION_MAX_TOKENS = 8000


CORRECTION_PROMPT = """You are a Japanese historical sword catalog expert.

I have OCR text extracted from a Japanese sword catalog (重要刀剣等図譜). The OCR may contain errors due to:
- Old/historical kanji forms
- Vertical text layout confusion
- Similar-looking characters
- Technical sword terminology

**Your task:** Review the OCR text alongside the image and produce CORRECTED Japanese text.

**Instructions:**
1. Compare the OCR with the actual image
2. Fix any OCR errors you identify
3. Preserve the original structure and layout
4. Use proper historical kanji forms when appropriate
5. Output ONLY the corrected Japanese text, nothing else

**OCR Text:**
{raw_ocr}

**Corrected Text:**"""


TRANSLATION_PROMPT = """You are a Japanese sword expert translator specializing in historical sword catalogs.

I have a corrected Japanese text description from an Important Sword Catalog (重要刀剣等図譜).

**Your task:** Translate this to well-structured English Markdown.

**Output Format:**

# [Sword Type] - [Smith/School Name]

## Basic Information
- **Classification:** [太刀/脇指/短刀/etc.]
- **Signature (銘):** [Transcribe signature]
- **Attribution:** [If unsigned, the attributed smith/school]
- **Period:** [Estimated period/era]

## Measurements (法量)
- **Total Length:** [XX cm]
- **Blade Length:** [XX cm]
- **Curvature (反り):** [XX cm]
- **Base Width (元幅):** [XX cm]
- **Tip Width (先幅):** [XX cm]
- **Blade Thickness:** [XX cm]

## Physical Description (形状)
[Detailed description of blade shape, curvature, thickness, tip form, etc.]

## Hamon (刃文) - Temper Pattern
[Description of the temper line pattern]

## Jigane (地鉄) - Steel Pattern
[Description of the steel grain pattern]

## Nakago (茎) - Tang
[Description of tang condition, file marks, patina, holes, etc.]

## Historical Context (伝来)
[Provenance, ownership history, notable information]

## Notes
[Any additional observations or scholarly notes]

---

**Japanese Text:**
{corrected_ocr}

**English Translation (Markdown):**"""


def build_correction_prompt(raw_ocr: str) -> str:
    return CORRECTION_PROMPT.format(raw_ocr=raw_ocr)


def build_translation_prompt(corrected_ocr: str) -> str:
    return TRANSLATION_PROMPT.format(corrected_ocr=corrected_ocr)
