from abc import ABC, abstractmethod

from resumefit.models import JobPosting


class JobSource(ABC):
    @abstractmethod
    def search(self, keywords: list[str]) -> list[JobPosting]:
        pass
