"""Gender analyzer package for predicting the likely gender of person names."""
from gender_analyzer.normalization import extract_first_name, parse_name, ParsedName
from gender_analyzer.heuristic import heuristic_gender, predict_gender_simple
from gender_analyzer.predictors import (
    PROVIDERS,
    Predictor,
    PredictionOutcome,
    PredictionError,
    ProviderConfig,
    create_predictor,
    predict_gender,
)
from gender_analyzer.pipeline import (
    PipelineState,
    PipelineValidationError,
    PredictionPipeline,
    PredictionResult,
    ReanalysisFilter,
)
from gender_analyzer.ingest import SAMPLE_NAMES, load_names, load_names_from_csv, parse_name_list
from gender_analyzer.export import (
    default_export_filename,
    export_results,
    summarize_results,
    to_csv_text,
    to_tsv_text,
)

__version__ = "0.1.0"

__all__ = [
    "extract_first_name",
    "parse_name",
    "ParsedName",
    "heuristic_gender",
    "predict_gender_simple",
    "PROVIDERS",
    "Predictor",
    "PredictionOutcome",
    "PredictionError",
    "ProviderConfig",
    "create_predictor",
    "predict_gender",
    "PipelineState",
    "PipelineValidationError",
    "PredictionPipeline",
    "PredictionResult",
    "ReanalysisFilter",
    "SAMPLE_NAMES",
    "load_names",
    "load_names_from_csv",
    "parse_name_list",
    "default_export_filename",
    "export_results",
    "summarize_results",
    "to_csv_text",
    "to_tsv_text",
]
