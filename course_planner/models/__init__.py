# Models module - data classes for the curriculum, local videos and the Master Plan
from .curriculum import Curriculum, CurriculumSection, CurriculumLesson
from .video import LocalVideoFile, LessonTarget, MatchedPair
from .plan import MasterPlan, PlanSection, PlanLesson

__all__ = [
    'Curriculum',
    'CurriculumSection',
    'CurriculumLesson',
    'LocalVideoFile',
    'LessonTarget',
    'MatchedPair',
    'MasterPlan',
    'PlanSection',
    'PlanLesson',
]
