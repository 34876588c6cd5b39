"""Built-in skeletons and fragment rule table.

Skeleton templates are interpolated by the composer; fragment templates are
rendered by their rule. All templates use ``string.Template`` syntax so the
braces of the emitted source need no escaping.

Rule precedence bands:
    100-199  compliance
    200-299  features
    300-399  governance

Every predicate only checks for the presence of building blocks, so adding a
block can only add fragments.
"""

from string import Template
from typing import Callable, Dict, List, Mapping, Optional

from ..schemas import (
    GeneratorCFG,
    TokenSpecification,
    BlockCategory,
    SLOT_STANDARDS,
    normalize_block_name,
)
from .interpolator import (
    NOW_MARKER,
    comment_text,
    format_list,
    quote_literal,
    sanitize_identifier,
    supply_expression,
    to_epoch_seconds,
)
from .registry import BaseSkeleton, FragmentRule


ERC20 = "ERC-20"
ERC721 = "ERC-721"
ERC1155 = "ERC-1155"
ERC1400 = "ERC-1400"
ERC3525 = "ERC-3525"
ERC4626 = "ERC-4626"

ALL_STANDARDS = frozenset({ERC20, ERC721, ERC1155, ERC1400, ERC3525, ERC4626})
FUNGIBLE = frozenset({ERC20, ERC1400, ERC4626})
INVESTOR_GATED = frozenset({ERC20, ERC1400, ERC3525, ERC4626})

# Trigger that matches any block in the rule's category
ANY_BLOCK = "*"


# =============================================================================
# Skeletons
# =============================================================================

_PREAMBLE = """\
// SPDX-License-Identifier: ${license}
pragma solidity ${pragma};

"""

_OWNABLE_IMPORT = 'import "@openzeppelin/contracts/access/Ownable.sol";\n'

_NATSPEC = """\
/// @title ${title}
/// @notice ${notice}
"""

_FOOTER = "}\n"

_ERC20_HEADER = (
    _PREAMBLE
    + 'import "@openzeppelin/contracts/token/ERC20/ERC20.sol";\n'
    + _OWNABLE_IMPORT
    + "\n"
    + _NATSPEC
    + "contract ${contract_name} is ERC20, Ownable {\n"
)

_ERC20_CONSTRUCTOR = """\
    constructor() ERC20(${name_literal}, ${symbol_literal}) {
        _mint(msg.sender, ${supply_expression});
    }

    function decimals() public pure override returns (uint8) {
        return ${decimals};
    }
"""

_ERC1400_HEADER = (
    _PREAMBLE
    + 'import "@openzeppelin/contracts/token/ERC20/ERC20.sol";\n'
    + _OWNABLE_IMPORT
    + "\n"
    + _NATSPEC
    + "contract ${contract_name} is ERC20, Ownable {\n"
    + "    // ERC-1400 Security Token Implementation\n"
    + "    bytes32 public constant DEFAULT_PARTITION = \"default\";\n"
    + "    mapping(bytes32 => uint256) private _partitionSupply;\n"
    + "\n"
)

_ERC1400_CONSTRUCTOR = """\
    constructor() ERC20(${name_literal}, ${symbol_literal}) {
        _mint(msg.sender, ${supply_expression});
        _partitionSupply[DEFAULT_PARTITION] = ${supply_expression};
    }

    function decimals() public pure override returns (uint8) {
        return ${decimals};
    }

    function totalSupplyByPartition(bytes32 partition) external view returns (uint256) {
        return _partitionSupply[partition];
    }
"""

_ERC721_HEADER = (
    _PREAMBLE
    + 'import "@openzeppelin/contracts/token/ERC721/ERC721.sol";\n'
    + _OWNABLE_IMPORT
    + "\n"
    + _NATSPEC
    + "contract ${contract_name} is ERC721, Ownable {\n"
    + "    uint256 public constant MAX_SUPPLY = ${total_supply};\n"
    + "    uint256 private _nextTokenId = 1;\n"
    + "\n"
)

_ERC721_CONSTRUCTOR = """\
    constructor() ERC721(${name_literal}, ${symbol_literal}) {}

    function mint(address to) external onlyOwner returns (uint256) {
        require(_nextTokenId <= MAX_SUPPLY, "Max supply reached");
        uint256 tokenId = _nextTokenId++;
        _safeMint(to, tokenId);
        return tokenId;
    }
"""

_ERC1155_HEADER = (
    _PREAMBLE
    + 'import "@openzeppelin/contracts/token/ERC1155/ERC1155.sol";\n'
    + _OWNABLE_IMPORT
    + "\n"
    + _NATSPEC
    + "contract ${contract_name} is ERC1155, Ownable {\n"
    + "    string public name = ${name_literal};\n"
    + "    string public symbol = ${symbol_literal};\n"
    + "    uint256 public constant PRIMARY_CLASS = 0;\n"
    + "\n"
)

_ERC1155_CONSTRUCTOR = """\
    constructor() ERC1155("") {
        _mint(msg.sender, PRIMARY_CLASS, ${supply_expression}, "");
    }
"""

_ERC4626_HEADER = (
    _PREAMBLE
    + 'import "@openzeppelin/contracts/token/ERC20/extensions/ERC4626.sol";\n'
    + _OWNABLE_IMPORT
    + "\n"
    + _NATSPEC
    + "contract ${contract_name} is ERC4626, Ownable {\n"
    + "    uint256 public constant SUPPLY_CAP = ${supply_expression};\n"
    + "\n"
)

_ERC4626_CONSTRUCTOR = """\
    constructor(IERC20 asset_) ERC20(${name_literal}, ${symbol_literal}) ERC4626(asset_) {}

    function maxMint(address) public view override returns (uint256) {
        return SUPPLY_CAP - totalSupply();
    }
"""

_ERC3525_HEADER = (
    _PREAMBLE
    + 'import "@openzeppelin/contracts/token/ERC721/extensions/ERC721Enumerable.sol";\n'
    + _OWNABLE_IMPORT
    + "\n"
    + _NATSPEC
    + """\
contract ${contract_name} is ERC721Enumerable, Ownable {
    // ERC-3525 Semi-Fungible Token Implementation for Structured Products

    // Token details
    string private _name = ${name_literal};
    string private _symbol = ${symbol_literal};
    uint8 private _decimals = ${decimals};
    uint256 private _totalSupply = ${total_supply};

    // Tranche/Slot structure
    struct Tranche {
        uint256 slotId;
        string name;
        uint256 value;
        uint256 interestRate; // Basis points (1% = 100)
    }

    // Mapping from slot ID to tranche details
    mapping(uint256 => Tranche) private _tranches;

    // Mapping from token ID to slot ID
    mapping(uint256 => uint256) private _tokenSlots;

    // Mapping from token ID to value
    mapping(uint256 => uint256) private _tokenValues;

    bool private _tranchesInitialized;

    // Issuance and maturity dates
    uint256 private _issuanceDate = ${issuance_expression};
    uint256 private _maturityDate = ${maturity_expression};

    // Conversion rate to ERC-20
    uint256 private _conversionRate = ${conversion_rate};

    // Events
    event SlotCreated(uint256 indexed slotId, string name, uint256 value, uint256 interestRate);
    event TokenMinted(address indexed to, uint256 indexed tokenId, uint256 indexed slotId, uint256 value);

"""
)

_ERC3525_CONSTRUCTOR = """\
    constructor() ERC721(${name_literal}, ${symbol_literal}) {}

    function _createTranche(uint256 slotId, string memory name, uint256 value, uint256 interestRate) internal {
        require(_tranches[slotId].slotId == 0, "Tranche already exists");
        _tranches[slotId] = Tranche(slotId, name, value, interestRate);
        emit SlotCreated(slotId, name, value, interestRate);
    }

    function mintToken(address to, uint256 slotId, uint256 value) external onlyOwner {
        require(_tranches[slotId].slotId != 0, "Tranche does not exist");
        require(value > 0, "Value must be greater than 0");

        uint256 tokenId = totalSupply() + 1;
        _mint(to, tokenId);
        _tokenSlots[tokenId] = slotId;
        _tokenValues[tokenId] = value;

        emit TokenMinted(to, tokenId, slotId, value);
    }

    function getTokenSlot(uint256 tokenId) external view returns (uint256) {
        require(_exists(tokenId), "Token does not exist");
        return _tokenSlots[tokenId];
    }

    function getTokenValue(uint256 tokenId) external view returns (uint256) {
        require(_exists(tokenId), "Token does not exist");
        return _tokenValues[tokenId];
    }

    function getTrancheDetails(uint256 slotId) external view returns (string memory, uint256, uint256) {
        require(_tranches[slotId].slotId != 0, "Tranche does not exist");
        Tranche memory tranche = _tranches[slotId];
        return (tranche.name, tranche.value, tranche.interestRate);
    }

    function getMaturityDate() external view returns (uint256) {
        return _maturityDate;
    }

    function getIssuanceDate() external view returns (uint256) {
        return _issuanceDate;
    }

    function getConversionRate() external view returns (uint256) {
        return _conversionRate;
    }
"""

_ERC3525_TRANCHES = """
    function initializeTranches() external onlyOwner {
        require(!_tranchesInitialized, "Tranches already initialized");
        _tranchesInitialized = true;
${statements}
    }
"""


def build_skeletons(config: GeneratorCFG) -> Dict[str, BaseSkeleton]:
    """Skeleton per supported standard."""
    return {
        ERC20: BaseSkeleton(_ERC20_HEADER, _ERC20_CONSTRUCTOR, _FOOTER),
        ERC721: BaseSkeleton(_ERC721_HEADER, _ERC721_CONSTRUCTOR, _FOOTER),
        ERC1155: BaseSkeleton(_ERC1155_HEADER, _ERC1155_CONSTRUCTOR, _FOOTER),
        ERC1400: BaseSkeleton(_ERC1400_HEADER, _ERC1400_CONSTRUCTOR, _FOOTER),
        ERC3525: BaseSkeleton(_ERC3525_HEADER, _ERC3525_CONSTRUCTOR, _FOOTER, _ERC3525_TRANCHES),
        ERC4626: BaseSkeleton(_ERC4626_HEADER, _ERC4626_CONSTRUCTOR, _FOOTER),
    }


# =============================================================================
# Shared value expressions
# =============================================================================

def issuance_expression(spec: TokenSpecification) -> str:
    return str(to_epoch_seconds(spec.metadata.issuance_date))


def maturity_expression(spec: TokenSpecification, config: GeneratorCFG) -> str:
    epoch = to_epoch_seconds(spec.metadata.maturity_date)
    if epoch == NOW_MARKER:
        return f"{NOW_MARKER} + {config.default_maturity_offset_seconds}"
    return str(epoch)


def conversion_rate(spec: TokenSpecification, config: GeneratorCFG) -> int:
    return spec.metadata.conversion_rate or config.default_conversion_rate


def _transfer_unit(spec: TokenSpecification) -> str:
    """Name of the third transfer-hook argument."""
    return "tokenId" if spec.standard in SLOT_STANDARDS else "amount"


# =============================================================================
# Fragment templates - compliance
# =============================================================================

_KYC = """
    // KYC Implementation
    mapping(address => bool) private _kycApproved;

    function setKycStatus(address account, bool status) external onlyOwner {
        _kycApproved[account] = status;
    }

    function _beforeTokenTransfer(address from, address to, uint256 amount) internal override {
        super._beforeTokenTransfer(from, to, amount);
        require(from == address(0) || _kycApproved[from], "KYC not approved for sender");
        require(to == address(0) || _kycApproved[to], "KYC not approved for recipient");
    }
"""

_WHITELIST = """
    // Compliance Controls (${controls})
    mapping(address => bool) private _whitelisted;
    bool private _whitelistEnabled = ${whitelist_enabled};

    function setWhitelistStatus(address account, bool status) external onlyOwner {
        _whitelisted[account] = status;
    }

    function setWhitelistEnabled(bool enabled) external onlyOwner {
        _whitelistEnabled = enabled;
    }

    function _beforeTokenTransfer(address from, address to, uint256 ${unit}) internal override {
        super._beforeTokenTransfer(from, to, ${unit});
        if (_whitelistEnabled) {
            require(from == address(0) || _whitelisted[from], "Sender not whitelisted");
            require(to == address(0) || _whitelisted[to], "Recipient not whitelisted");
        }
    }
"""

_AML = """
    // AML Screening
    mapping(address => bool) private _amlFlagged;

    event AccountFlagged(address indexed account, bool flagged);

    function setAmlFlag(address account, bool flagged) external onlyOwner {
        _amlFlagged[account] = flagged;
        emit AccountFlagged(account, flagged);
    }

    function isAmlFlagged(address account) public view returns (bool) {
        return _amlFlagged[account];
    }
"""

_INVESTOR_QUALIFICATION = """
    // Investor Qualification (${requirement})
    mapping(address => bool) private _qualifiedInvestors;

    function setInvestorQualification(address investor, bool qualified) external onlyOwner {
        _qualifiedInvestors[investor] = qualified;
    }

    function isQualifiedInvestor(address investor) public view returns (bool) {
        return _qualifiedInvestors[investor];
    }
"""

_JURISDICTION = """
    // Jurisdiction Restrictions
    mapping(string => bool) private _restrictedJurisdictions;

    function setJurisdictionRestriction(string memory jurisdiction, bool restricted) external onlyOwner {
        _restrictedJurisdictions[jurisdiction] = restricted;
    }

    function isJurisdictionRestricted(string memory jurisdiction) public view returns (bool) {
        return _restrictedJurisdictions[jurisdiction];
    }
"""

_JURISDICTION_DEFAULTS = """
    function restrictDefaultJurisdictions() external onlyOwner {
${statements}
    }
"""

_MAX_INVESTORS = """
    // Maximum Investors
    uint256 public maxInvestors;
    uint256 private _investorCount;

    function setMaxInvestors(uint256 limit) external onlyOwner {
        require(limit >= _investorCount, "Limit below current investor count");
        maxInvestors = limit;
    }
"""


# =============================================================================
# Fragment templates - features
# =============================================================================

_TRANCHE_STRUCTURE = """
    // Tranche Structure
    uint256 public constant TOTAL_TRANCHE_VALUE = ${tranche_total};
"""

_TRANCHE_SLOT_IDS = """
    function trancheSlotIds() external pure returns (uint256[${tranche_count}] memory) {
        return [${slot_ids}];
    }
"""

_VOTING = """
    // Voting
    mapping(address => address) private _delegates;

    event DelegateChanged(address indexed delegator, address indexed delegatee);

    function delegate(address delegatee) external {
        _delegates[msg.sender] = delegatee;
        emit DelegateChanged(msg.sender, delegatee);
    }

    function delegates(address account) external view returns (address) {
        return _delegates[account];
    }
"""

_DIVIDENDS = """
    // Dividend Distribution
    function distributeTokenDividends(uint256 amount) external onlyOwner {
        // Dividend distribution logic
    }
"""

_RENTAL_INCOME = """
    // Rental Income
    event RentalIncomeDeposited(uint256 amount, uint256 period);

    function depositRentalIncome(uint256 amount, uint256 period) external onlyOwner {
        emit RentalIncomeDeposited(amount, period);
    }
"""

_TRANSFER_RESTRICTIONS = """
    // Transfer Restrictions
    bool public transfersPaused;

    function setTransfersPaused(bool paused) external onlyOwner {
        transfersPaused = paused;
    }
"""

_REDEMPTION_FUNGIBLE = """
    // Redemption Rights
    event Redeemed(address indexed holder, uint256 amount);

    function redeem(uint256 amount) external {
        _burn(msg.sender, amount);
        emit Redeemed(msg.sender, amount);
    }
"""

_REDEMPTION_SLOT = """
    // Redemption Rights
    event Redeemed(address indexed holder, uint256 indexed tokenId, uint256 value);

    function redeem(uint256 tokenId) external {
        require(ownerOf(tokenId) == msg.sender, "Not token owner");
        uint256 value = _tokenValues[tokenId];
        _burn(tokenId);
        emit Redeemed(msg.sender, tokenId, value);
    }
"""

_LOCKUP = """
    // Lockup Period
    uint256 public lockupEnd = ${issuance_expression} + 365 days;

    function isLocked() public view returns (bool) {
        return block.timestamp < lockupEnd;
    }
"""

_VESTING = """
    // Vesting Schedule
    struct VestingSchedule {
        uint256 total;
        uint256 released;
        uint256 start;
        uint256 duration;
    }

    mapping(address => VestingSchedule) private _vesting;

    function setVestingSchedule(address beneficiary, uint256 total, uint256 start, uint256 duration) external onlyOwner {
        _vesting[beneficiary] = VestingSchedule(total, 0, start, duration);
    }
"""

_MATURITY = """
    // Maturity Date
    uint256 private _maturityDate = ${maturity_expression};

    function getMaturityDate() external view returns (uint256) {
        return _maturityDate;
    }

    function isMatured() public view returns (bool) {
        return block.timestamp >= _maturityDate;
    }
"""

_FIXED_INTEREST = """
    // Fixed Interest
    uint256 public couponRateBps;

    function setCouponRate(uint256 rateBps) external onlyOwner {
        couponRateBps = rateBps;
    }
"""

_SLOT_INTEREST = """
    // Interest Rate
    function accruedInterest(uint256 tokenId) external view returns (uint256) {
        Tranche memory tranche = _tranches[_tokenSlots[tokenId]];
        uint256 elapsed = block.timestamp - _issuanceDate;
        return _tokenValues[tokenId] * tranche.interestRate * elapsed / (10000 * 365 days);
    }
"""

_CONDITIONAL_RETURNS = """
    // Conditional Returns
    mapping(uint256 => bool) private _returnConditionMet;

    function setReturnCondition(uint256 slotId, bool met) external onlyOwner {
        _returnConditionMet[slotId] = met;
    }
"""

_BARRIER_LEVELS = """
    // Barrier Levels
    mapping(uint256 => uint256) private _barrierLevels;

    function setBarrierLevel(uint256 slotId, uint256 level) external onlyOwner {
        _barrierLevels[slotId] = level;
    }
"""

_UNDERLYING_ASSET = """
    // Underlying Asset Linkage
    address public underlyingAsset;

    function setUnderlyingAsset(address asset) external onlyOwner {
        underlyingAsset = asset;
    }
"""

_CREDIT_EVENTS = """
    // Credit Event Triggers
    event CreditEventTriggered(uint256 indexed slotId, string reason);

    mapping(uint256 => bool) private _creditEventOccurred;

    function triggerCreditEvent(uint256 slotId, string memory reason) external onlyOwner {
        require(_tranches[slotId].slotId != 0, "Tranche does not exist");
        _creditEventOccurred[slotId] = true;
        emit CreditEventTriggered(slotId, reason);
    }
"""

_NAV = """
    // NAV Calculation
    function navPerShare() external view returns (uint256) {
        uint256 supply = totalSupply();
        return supply == 0 ? 0 : totalAssets() * 1e18 / supply;
    }
"""

_REDEMPTION_WINDOWS = """
    // Redemption Windows
    uint256 public redemptionWindowStart;
    uint256 public redemptionWindowEnd;

    function setRedemptionWindow(uint256 start, uint256 end) external onlyOwner {
        require(end > start, "Invalid window");
        redemptionWindowStart = start;
        redemptionWindowEnd = end;
    }
"""

_MANAGEMENT_FEE = """
    // Management Fee
    uint256 public managementFeeBps;

    function setManagementFee(uint256 feeBps) external onlyOwner {
        require(feeBps <= 10000, "Fee exceeds 100%");
        managementFeeBps = feeBps;
    }
"""


# =============================================================================
# Fragment templates - governance
# =============================================================================

_ISSUER_CONTROL = """
    // Issuer Control
    function forceTransfer(address from, address to, uint256 amount) external onlyOwner {
        _transfer(from, to, amount);
    }
"""

_ISSUER_SLOT_CONTROL = """
    // Issuer Control
    mapping(uint256 => bool) private _frozenSlots;

    function setSlotFrozen(uint256 slotId, bool frozen) external onlyOwner {
        _frozenSlots[slotId] = frozen;
    }
"""

_APPROVAL_AUTHORITY = """
    // ${authority}
    mapping(address => bool) private _approvers;

    modifier onlyApprover() {
        require(_approvers[msg.sender], "Approval required");
        _;
    }

    function setApprover(address account, bool approved) external onlyOwner {
        _approvers[account] = approved;
    }
"""

_DAO = """
    // DAO Governance
    struct Proposal {
        string description;
        uint256 votesFor;
        uint256 votesAgainst;
        uint256 deadline;
        bool executed;
    }

    Proposal[] public proposals;

    function propose(string memory description, uint256 votingPeriod) external returns (uint256) {
        proposals.push(Proposal(description, 0, 0, block.timestamp + votingPeriod, false));
        return proposals.length - 1;
    }
"""

_MULTI_SIG = """
    // Multi-Signature
    mapping(address => bool) public isSigner;
    uint256 public requiredSignatures = 2;

    function setSigner(address account, bool enabled) external onlyOwner {
        isSigner[account] = enabled;
    }

    function setRequiredSignatures(uint256 required) external onlyOwner {
        require(required > 0, "At least one signature required");
        requiredSignatures = required;
    }
"""


# =============================================================================
# Rule table
# =============================================================================

ContextFn = Callable[[TokenSpecification], Mapping[str, object]]


def _matched(spec: TokenSpecification, category: BlockCategory, triggers) -> List[str]:
    """Block names of the spec that match the triggers, in spec order."""
    return [
        name for name in spec.blocks.names(category)
        if ANY_BLOCK in triggers or normalize_block_name(name) in triggers
    ]


def _rule(
    rule_id: str,
    standards,
    category: BlockCategory,
    names,
    precedence: int,
    template,
    context: Optional[ContextFn] = None,
) -> FragmentRule:
    """Build a rule whose predicate is 'any of these blocks is present'.

    ``template`` is either template text or a callable spec -> template text.
    """
    triggers = tuple(ANY_BLOCK if name == ANY_BLOCK else normalize_block_name(name) for name in names)

    def predicate(spec: TokenSpecification) -> bool:
        return bool(_matched(spec, category, triggers))

    def render(spec: TokenSpecification) -> str:
        text = template(spec) if callable(template) else template
        values = context(spec) if context else {}
        return Template(text).substitute(values)

    return FragmentRule(
        id=rule_id,
        applies_to_standards=frozenset(standards),
        predicate=predicate,
        render=render,
        precedence=precedence,
        category=category,
        triggers=triggers,
    )


def build_fragment_rules(config: GeneratorCFG) -> List[FragmentRule]:
    """The built-in rule table, in registration order."""

    def whitelist_context(spec):
        return {
            "controls": comment_text(", ".join(spec.blocks.compliance)),
            "whitelist_enabled": "true" if spec.metadata.whitelist_enabled else "false",
            "unit": _transfer_unit(spec),
        }

    qualification_triggers = (
        "Accredited Investors Only",
        "accredited",
        "Sophisticated Investors Only",
        "Investor Qualification",
    )

    def qualification_context(spec):
        keys = tuple(normalize_block_name(n) for n in qualification_triggers)
        return {"requirement": comment_text(", ".join(_matched(spec, "compliance", keys)))}

    def jurisdiction_template(spec):
        regions = sorted(spec.metadata.jurisdiction_restrictions)
        if not regions:
            return _JURISDICTION
        statements = format_list(
            regions,
            lambda code: f"        _restrictedJurisdictions[{quote_literal(code)}] = true;",
        )
        # Rendered statements may contain '$'; substitute them in before templating
        return _JURISDICTION + _JURISDICTION_DEFAULTS.replace("${statements}", statements.replace("$", "$$"))

    def tranche_template(spec):
        if not spec.tranches:
            return _TRANCHE_STRUCTURE
        return _TRANCHE_STRUCTURE + _TRANCHE_SLOT_IDS

    def tranche_context(spec):
        slot_ids = sorted(tranche.id for tranche in spec.tranches)
        return {
            "tranche_total": spec.tranche_total,
            "tranche_count": len(slot_ids),
            "slot_ids": ", ".join(f"uint256({slot_id})" for slot_id in slot_ids),
        }

    def redemption_template(spec):
        return _REDEMPTION_SLOT if spec.standard in SLOT_STANDARDS else _REDEMPTION_FUNGIBLE

    approval_triggers = (
        "Board Approval",
        "Manager Approval",
        "Fund Manager Control",
    )

    def approval_context(spec):
        keys = tuple(normalize_block_name(n) for n in approval_triggers)
        return {"authority": comment_text(", ".join(_matched(spec, "governance", keys)))}

    return [
        # Compliance
        _rule("kyc", {ERC20, ERC721, ERC1155, ERC4626}, "compliance", ("KYC",), 100, _KYC),
        _rule("compliance_whitelist", {ERC1400, ERC3525}, "compliance", (ANY_BLOCK,), 100,
              _WHITELIST, whitelist_context),
        _rule("aml", ALL_STANDARDS, "compliance", ("AML",), 110, _AML),
        _rule("investor_qualification", INVESTOR_GATED, "compliance", qualification_triggers, 120,
              _INVESTOR_QUALIFICATION, qualification_context),
        _rule("jurisdiction_restrictions", INVESTOR_GATED, "compliance",
              ("Jurisdiction Restrictions", "jurisdiction"), 130, jurisdiction_template),
        _rule("max_investors", INVESTOR_GATED, "compliance", ("Maximum Investors",), 140, _MAX_INVESTORS),

        # Features
        _rule("tranche_structure", {ERC3525}, "features", ("Tranche Structure",), 200,
              tranche_template, tranche_context),
        _rule("voting", {ERC20, ERC1400}, "features", ("Voting",), 205, _VOTING),
        _rule("dividends", FUNGIBLE, "features", ("Dividends",), 210, _DIVIDENDS),
        _rule("rental_income", {ERC1400}, "features", ("Rental Income",), 215, _RENTAL_INCOME),
        _rule("transfer_restrictions", ALL_STANDARDS, "features", ("Transfer Restrictions",), 220,
              _TRANSFER_RESTRICTIONS),
        _rule("redemption", INVESTOR_GATED, "features", ("Redemption Rights", "redemption", "Early Redemption"),
              225, redemption_template),
        _rule("lockup", {ERC20, ERC1400}, "features", ("Lockup Period", "lockup"), 230, _LOCKUP,
              lambda spec: {"issuance_expression": issuance_expression(spec)}),
        _rule("vesting", {ERC20, ERC1400}, "features", ("Vesting Schedule", "vesting"), 235, _VESTING),
        _rule("maturity", FUNGIBLE, "features", ("Maturity Date",), 240, _MATURITY,
              lambda spec: {"maturity_expression": maturity_expression(spec, config)}),
        _rule("fixed_interest", {ERC20, ERC1400}, "features", ("Fixed Interest", "Interest Rate"), 245,
              _FIXED_INTEREST),
        _rule("slot_interest", {ERC3525}, "features", ("Interest Rate", "Fixed Interest"), 245, _SLOT_INTEREST),
        _rule("conditional_returns", {ERC3525}, "features", ("Conditional Returns",), 250, _CONDITIONAL_RETURNS),
        _rule("barrier_levels", {ERC3525}, "features", ("Barrier Levels",), 255, _BARRIER_LEVELS),
        _rule("underlying_asset_linkage", {ERC3525}, "features", ("Underlying Asset Linkage",), 260,
              _UNDERLYING_ASSET),
        _rule("credit_event_triggers", {ERC3525}, "features", ("Credit Event Triggers",), 265, _CREDIT_EVENTS),
        _rule("nav_calculation", {ERC4626}, "features", ("NAV Calculation",), 270, _NAV),
        _rule("redemption_windows", {ERC4626}, "features", ("Redemption Windows",), 275, _REDEMPTION_WINDOWS),
        _rule("management_fee", {ERC4626}, "features", ("Management Fee",), 280, _MANAGEMENT_FEE),

        # Governance
        _rule("issuer_control", FUNGIBLE, "governance", ("Issuer Control",), 300, _ISSUER_CONTROL),
        _rule("issuer_slot_control", {ERC3525}, "governance", ("Issuer Control",), 300, _ISSUER_SLOT_CONTROL),
        _rule("approval_authority", ALL_STANDARDS, "governance", approval_triggers, 310,
              _APPROVAL_AUTHORITY, approval_context),
        _rule("dao_governance", ALL_STANDARDS, "governance", ("DAO Governance", "dao"), 320, _DAO),
        _rule("multi_sig", ALL_STANDARDS, "governance", ("Multi-Signature", "multi_sig"), 330, _MULTI_SIG),
    ]


def skeleton_placeholders(spec: TokenSpecification, config: GeneratorCFG) -> Dict[str, object]:
    """Values substituted into header and constructor templates."""
    notice = spec.metadata.description or " - ".join(
        part for part in (spec.metadata.product, spec.metadata.category) if part
    )
    return {
        "license": config.license_identifier,
        "pragma": config.pragma,
        "title": comment_text(spec.name) or sanitize_identifier(spec.name),
        "notice": comment_text(notice) or config.default_notice,
        "contract_name": sanitize_identifier(spec.name),
        "name_literal": quote_literal(spec.name),
        "symbol_literal": quote_literal(spec.symbol),
        "decimals": spec.decimals,
        "total_supply": spec.total_supply,
        "supply_expression": supply_expression(spec.total_supply, spec.decimals),
        "issuance_expression": issuance_expression(spec),
        "maturity_expression": maturity_expression(spec, config),
        "conversion_rate": conversion_rate(spec, config),
    }
