from .abstract import TimeStampedModel, BaseModel
