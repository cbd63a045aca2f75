"""Image matching strategies and helpers."""

from .base import BaseMatcher
from .confidence import ccoeff_confidence, clamp_confidence, rgb_confidence
from .homography import HomographyParams
from .image_utils import cv2_to_pil, pil_to_cv2
from .keypoint_matcher import FEATURE_DETECTORS, FeaturePointMatcher
from .matcher_chain import MATCHER_REGISTRY, MatcherChain, MatcherConfig, create_matcher
from .multiscale_matcher import MultiScaleTemplateMatcher
from .template import Template
from .template_matcher import ExactTemplateMatcher

__all__ = [
    "BaseMatcher",
    "ExactTemplateMatcher",
    "MultiScaleTemplateMatcher",
    "FeaturePointMatcher",
    "FEATURE_DETECTORS",
    "HomographyParams",
    "MatcherChain",
    "MatcherConfig",
    "MATCHER_REGISTRY",
    "create_matcher",
    "Template",
    "rgb_confidence",
    "ccoeff_confidence",
    "clamp_confidence",
    "pil_to_cv2",
    "cv2_to_pil",
]
