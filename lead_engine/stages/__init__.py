# Scoring stages module
from .stage1_features import FeatureExtractionStage
from .stage2_combiner import ScoreCombinerStage
from .stage3_confidence import ConfidenceEstimationStage
from .stage4_classifier import ClassificationStage
from .stage5_explanation import ExplanationStage
