from .candidate import Candidate
from .vacancy import Vacancy, VacancyRequiredDocument
from .application import FolioSequence, Application, ApplicationDocument, DocumentUpload
from .question import QuestionBank, QuestionBankVersion, Question
from .interview import RHInterview, RHInterviewAnswer, RHInterviewExtraQuestion, ManagerInterview
from .evaluation import EvaluationScore, EvaluationSummary
from .audit import AuditLog
