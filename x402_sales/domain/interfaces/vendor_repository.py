"""Interface for vendor storage (Repository Pattern)."""
from abc import ABC, abstractmethod
from typing import Optional

from x402_sales.domain.entities.vendor import Vendor


class IVendorRepository(ABC):
    """Interface for storing and retrieving vendors."""
    
    @abstractmethod
    def save(self, vendor: Vendor) -> Vendor:
        """
        Persist a vendor.
        
        Args:
            vendor: Vendor to store
            
        Returns:
            The stored vendor
        """
        pass
    
    @abstractmethod
    def find_by_id(self, vendor_id: str) -> Optional[Vendor]:
        """
        Look up a vendor by id.
        
        Args:
            vendor_id: Vendor identifier
            
        Returns:
            Vendor if found, None otherwise
        """
        pass
    
    @abstractmethod
    def find_by_api_key(self, api_key: str) -> Optional[Vendor]:
        """
        Look up a vendor by its API key.
        
        Args:
            api_key: Vendor API key
            
        Returns:
            Vendor if found, None otherwise
        """
        pass
